"""Forwarding calls to the recipe search and places search APIs."""
import logging
from typing import Any, Dict

import requests

from backend import config
from backend.exceptions import ServiceNotConfiguredError, UpstreamServiceError

logger = logging.getLogger(__name__)


def _get_json(url: str, params: Dict[str, Any], service: str) -> Dict[str, Any]:
    try:
        response = requests.get(url, params=params, timeout=config.PROXY_TIMEOUT)
        response.raise_for_status()
        return response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"{service} request failed: {e}")
        raise UpstreamServiceError(f"Failed to fetch from {service}", service=service) from e


def search_recipes(query: str) -> Dict[str, Any]:
    if not config.SPOONACULAR_API_KEY:
        raise ServiceNotConfiguredError("Recipe search")
    return _get_json(
        f"{config.SPOONACULAR_API_URL}/complexSearch",
        {
            "apiKey": config.SPOONACULAR_API_KEY,
            "query": query,
            "number": 12,
            "instructionsRequired": "true",
            "addRecipeInformation": "true",
            "fillIngredients": "true",
            "healthScore": "50-100",
        },
        service="recipes",
    )


def get_recipe(recipe_id: int) -> Dict[str, Any]:
    if not config.SPOONACULAR_API_KEY:
        raise ServiceNotConfiguredError("Recipe search")
    return _get_json(
        f"{config.SPOONACULAR_API_URL}/{recipe_id}/information",
        {"apiKey": config.SPOONACULAR_API_KEY},
        service="recipes",
    )


def search_places(
    lat: float,
    lon: float,
    term: str = "doctor",
    radius: int = 5000,
    limit: int = 20,
) -> Dict[str, Any]:
    """Search points of interest (doctors, clinics) around a coordinate."""
    if not config.TOMTOM_API_KEY:
        raise ServiceNotConfiguredError("Places search")
    return _get_json(
        f"{config.TOMTOM_API_URL}/{requests.utils.quote(term)}.json",
        {"lat": lat, "lon": lon, "radius": radius, "limit": limit, "key": config.TOMTOM_API_KEY},
        service="places",
    )
