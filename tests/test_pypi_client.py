"""Tests for the PyPI registry client."""

from unittest.mock import patch

import pytest

from registry import RegistryError
from registry.pypi.client import get_project_info


def _info(**overrides):
    info = {
        "name": "requests",
        "version": "2.31.0",
        "summary": "Python HTTP for Humans.",
        "home_page": "https://requests.readthedocs.io",
        "project_urls": {"Homepage": "https://github.com/psf/requests"},
        "requires_python": ">=3.7",
    }
    info.update(overrides)
    return {"info": info}


class TestGetProjectInfo:
    """Test get_project_info()."""

    @patch("registry.pypi.client.get_json")
    def test_found(self, mock_get_json):
        mock_get_json.return_value = (200, {}, _info())

        info = get_project_info("requests")

        assert info.name == "requests"
        assert info.version == "v2.31.0"
        assert info.summary == "Python HTTP for Humans."
        assert info.home_url == "https://requests.readthedocs.io"
        assert info.requires_python == ">=3.7"

    @patch("registry.pypi.client.get_json")
    def test_url_uses_canonical_name(self, mock_get_json):
        mock_get_json.return_value = (200, {}, _info(name="Flask_SQLAlchemy"))

        get_project_info("Flask_SQLAlchemy")

        url = mock_get_json.call_args[0][0]
        assert url == "https://pypi.org/pypi/flask-sqlalchemy/json"

    @patch("registry.pypi.client.get_json")
    def test_custom_index_url(self, mock_get_json):
        mock_get_json.return_value = (200, {}, _info())

        get_project_info("requests", url="https://mirror.example.com/pypi/")

        assert mock_get_json.call_args[0][0] == "https://mirror.example.com/pypi/requests/json"

    @patch("registry.pypi.client.get_json")
    def test_home_url_falls_back_to_project_urls(self, mock_get_json):
        mock_get_json.return_value = (200, {}, _info(home_page=""))

        assert get_project_info("requests").home_url == "https://github.com/psf/requests"

    @patch("registry.pypi.client.get_json")
    def test_missing_requires_python(self, mock_get_json):
        mock_get_json.return_value = (200, {}, _info(requires_python=""))

        assert get_project_info("requests").requires_python is None

    @patch("registry.pypi.client.get_json")
    def test_not_found(self, mock_get_json):
        mock_get_json.return_value = (404, {}, {"message": "Not Found"})

        assert get_project_info("no-such-package") is None

    @patch("registry.pypi.client.get_json")
    def test_not_found_message(self, mock_get_json):
        mock_get_json.return_value = (200, {}, {"message": "Not Found"})

        assert get_project_info("no-such-package") is None

    @patch("registry.pypi.client.get_json")
    def test_transport_failure(self, mock_get_json):
        mock_get_json.return_value = (0, {}, None)

        with pytest.raises(RegistryError, match="PyPI lookup failed"):
            get_project_info("requests")

    @patch("registry.pypi.client.get_json")
    def test_unexpected_answer(self, mock_get_json):
        mock_get_json.return_value = (403, {}, {"message": "Forbidden"})

        with pytest.raises(RegistryError, match="Forbidden"):
            get_project_info("requests")

    @patch("registry.pypi.client.get_json")
    def test_unparseable_body(self, mock_get_json):
        mock_get_json.return_value = (200, {}, None)

        with pytest.raises(RegistryError, match="HTTP 200"):
            get_project_info("requests")
