"""HTTP client for the AI backend (FastAPI service in ``backend/``)."""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """The AI backend was unreachable or answered with an error."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def _request(method, path, **kwargs):
    url = f"{settings.BACKEND_URL}{path}"
    try:
        response = requests.request(method, url, timeout=settings.BACKEND_TIMEOUT, **kwargs)
    except requests.RequestException as e:
        logger.error(f"Backend request {method} {path} failed: {e}")
        raise BackendError(f"Request failed: {e}") from e

    if response.status_code != 200:
        logger.error(f"Backend error on {path}: {response.status_code} - {response.text}")
        raise BackendError(f"Backend error: {response.status_code}", status_code=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise BackendError("Backend returned invalid JSON") from e


def request_predictions(symptoms):
    return _request("POST", "/predict", json={"symptoms": symptoms})


def request_chat(message, history, recent_symptoms):
    return _request(
        "POST",
        "/chat",
        json={"message": message, "history": history, "recentSymptoms": recent_symptoms},
    )


def search_recipes(query):
    return _request("GET", "/recipes", params={"query": query})


def get_recipe(recipe_id):
    return _request("GET", f"/recipes/{recipe_id}")


def search_doctors(lat, lon, term=None, radius=None, limit=None):
    params = {"lat": lat, "lon": lon, "term": term, "radius": radius, "limit": limit}
    return _request("GET", "/places", params={k: v for k, v in params.items() if v not in (None, "")})
