"""Tests for the recipe and places forwarding helpers."""
from unittest.mock import Mock, patch

import pytest
import requests

from backend import config, proxies
from backend.exceptions import ServiceNotConfiguredError, UpstreamServiceError


def _response(payload, status=200):
    response = Mock()
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return response


@pytest.fixture
def keys(monkeypatch):
    monkeypatch.setattr(config, "SPOONACULAR_API_KEY", "spoon-key")
    monkeypatch.setattr(config, "TOMTOM_API_KEY", "tomtom-key")


class TestRecipes:

    def test_search_sends_filters(self, keys):
        with patch("backend.proxies.requests.get", return_value=_response({"results": []})) as get:
            assert proxies.search_recipes("soup") == {"results": []}

        url = get.call_args.args[0]
        params = get.call_args.kwargs["params"]
        assert url.endswith("/complexSearch")
        assert params["query"] == "soup"
        assert params["apiKey"] == "spoon-key"
        assert params["healthScore"] == "50-100"

    def test_recipe_detail(self, keys):
        with patch("backend.proxies.requests.get", return_value=_response({"id": 42})) as get:
            assert proxies.get_recipe(42) == {"id": 42}

        assert get.call_args.args[0].endswith("/42/information")

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(config, "SPOONACULAR_API_KEY", None)

        with pytest.raises(ServiceNotConfiguredError):
            proxies.search_recipes("soup")

    def test_upstream_error(self, keys):
        with patch("backend.proxies.requests.get", return_value=_response({}, status=500)):
            with pytest.raises(UpstreamServiceError) as exc_info:
                proxies.search_recipes("soup")

        assert exc_info.value.details["service"] == "recipes"


class TestPlaces:

    def test_search_places(self, keys):
        with patch("backend.proxies.requests.get", return_value=_response({"results": []})) as get:
            proxies.search_places(51.5, -0.12, term="general practitioner", radius=2000)

        assert get.call_args.args[0].endswith("/general%20practitioner.json")
        params = get.call_args.kwargs["params"]
        assert params["radius"] == 2000
        assert params["key"] == "tomtom-key"

    def test_connection_error(self, keys):
        with patch("backend.proxies.requests.get", side_effect=requests.ConnectionError("offline")):
            with pytest.raises(UpstreamServiceError):
                proxies.search_places(0.0, 0.0)
