"""Spoonacular recipe API client.

Thin async wrapper over httpx with a request timeout and error
normalization: every failure surfaces as one of the upstream errors in
errors.py so routes can map them to HTTP statuses.
"""

import logging
from urllib.parse import quote

import httpx

from config import settings
from errors import (
    UpstreamPayloadError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

# Our query param name -> Spoonacular complexSearch param name
SEARCH_PARAM_MAP = {
    "q": "query",
    "ingredients": "includeIngredients",
    "cuisine": "cuisine",
    "diet": "diet",
    "intolerances": "intolerances",
    "maxReadyTime": "maxReadyTime",
    "sort": "sort",
}

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def build_search_params(params: dict) -> dict:
    """Map our search params to complexSearch params, with offset pagination."""
    mapped = {
        upstream: params[ours]
        for ours, upstream in SEARCH_PARAM_MAP.items()
        if params.get(ours)
    }
    page = max(1, int(params.get("page") or 1))
    page_size = min(MAX_PAGE_SIZE, max(1, int(params.get("pageSize") or DEFAULT_PAGE_SIZE)))
    mapped["number"] = page_size
    mapped["offset"] = (page - 1) * page_size
    return mapped


class SpoonacularClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.spoonacular_base_url,
            timeout=timeout if timeout is not None else settings.upstream_timeout_seconds,
            params={"apiKey": api_key if api_key is not None else (settings.spoonacular_key or "")},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict | None = None):
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            try:
                data = e.response.json()
            except ValueError:
                data = e.response.text
            logger.warning("Spoonacular %s returned %d", path, status)
            raise UpstreamStatusError(status, data) from e
        except httpx.TimeoutException as e:
            logger.warning("Spoonacular %s timed out: %s", path, e)
            raise UpstreamTimeoutError() from e
        except httpx.TransportError as e:
            logger.warning("Spoonacular %s unreachable: %s", path, e)
            raise UpstreamUnavailableError() from e
        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamPayloadError("Invalid response from upstream API") from e

    async def search_recipes(self, params: dict) -> dict | list:
        """Search recipes via /recipes/complexSearch."""
        return await self._get("/recipes/complexSearch", params=build_search_params(params))

    async def get_recipe_information(self, recipe_id: str | int) -> dict:
        """Detailed recipe info via /recipes/{id}/information."""
        if not recipe_id:
            raise ValueError("id required for get_recipe_information")
        # Encode the id so it cannot add path segments or query params upstream
        return await self._get(f"/recipes/{quote(str(recipe_id), safe='')}/information")
