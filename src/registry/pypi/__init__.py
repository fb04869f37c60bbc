"""PyPI registry client and Pipfile manifest parsing."""
