"""GitLab PyPI package registry client."""
