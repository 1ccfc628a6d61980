"""Recipe search and detail routes — cached proxy over Spoonacular.

GET /api/recipes       → /recipes/complexSearch  (cached SEARCH_TTL_SECONDS)
GET /api/recipes/{id}  → /recipes/{id}/information (cached DETAIL_TTL_SECONDS)
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from fastapi.responses import JSONResponse

from config import settings
from errors import UpstreamPayloadError, UpstreamStatusError
from services.cache import TTLCache
from services.cache_keys import (
    detail_key,
    dump_name_for_detail,
    dump_name_for_search,
    search_key,
    set_params,
)
from services.dumps import write_dump
from services.spoonacular import SpoonacularClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes")

REQUIRED_DETAIL_FIELDS = ["id", "title", "servings", "readyInMinutes"]


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_spoonacular(request: Request) -> SpoonacularClient:
    return request.app.state.spoonacular


def _status_error_response(exc: UpstreamStatusError, fallback: str) -> JSONResponse:
    """Map a non-2xx Spoonacular answer to our response."""
    if exc.status == 429:
        return JSONResponse(
            {"error": "Rate limited by Spoonacular", "details": exc.data or str(exc)},
            status_code=429,
        )
    return JSONResponse({"error": fallback, "details": str(exc)}, status_code=502)


@router.get("")
async def list_recipes(
    background_tasks: BackgroundTasks,
    q: str | None = Query(None),
    ingredients: str | None = Query(None),
    cuisine: str | None = Query(None),
    diet: str | None = Query(None),
    intolerances: str | None = Query(None),
    maxReadyTime: int | None = Query(None),
    sort: str | None = Query(None),
    page: int | None = Query(None),
    pageSize: int | None = Query(None),
    cache: TTLCache = Depends(get_cache),
    spoonacular: SpoonacularClient = Depends(get_spoonacular),
):
    """Search recipes, serving repeated identical queries from cache."""
    query = {
        "q": q,
        "ingredients": ingredients,
        "cuisine": cuisine,
        "diet": diet,
        "intolerances": intolerances,
        "maxReadyTime": maxReadyTime,
        "sort": sort,
        "page": page,
        "pageSize": pageSize,
    }
    cache_key = search_key(query)

    cached = cache.get(cache_key)
    if cached is not None:
        return {"fromCache": True, "data": cached}

    try:
        data = await spoonacular.search_recipes(query)
    except UpstreamStatusError as e:
        return _status_error_response(e, "Error fetching recipes")

    # Any JSON object or array is accepted; scalars are not a search result
    if not isinstance(data, (dict, list)):
        raise UpstreamPayloadError("Invalid response from upstream API")

    cache.set(cache_key, data, settings.search_ttl_seconds)
    background_tasks.add_task(
        write_dump,
        settings.data_dir,
        dump_name_for_search(query),
        {"query": set_params(query), "data": data},
    )
    return {"fromCache": False, "data": data}


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: str,
    background_tasks: BackgroundTasks,
    cache: TTLCache = Depends(get_cache),
    spoonacular: SpoonacularClient = Depends(get_spoonacular),
):
    """Detailed recipe information, cached per recipe id."""
    cache_key = detail_key(recipe_id)

    cached = cache.get(cache_key)
    if cached is not None:
        return {"fromCache": True, "data": cached}

    try:
        data = await spoonacular.get_recipe_information(recipe_id)
    except UpstreamStatusError as e:
        if e.status == 404:
            return JSONResponse({"error": "Recipe not found on Spoonacular"}, status_code=404)
        return _status_error_response(e, "Error fetching recipe")

    if not isinstance(data, dict):
        raise UpstreamPayloadError("Invalid response from upstream API")
    missing = [field for field in REQUIRED_DETAIL_FIELDS if field not in data]
    if missing:
        raise UpstreamPayloadError("Upstream response missing required fields", missing=missing)

    cache.set(cache_key, data, settings.detail_ttl_seconds)
    background_tasks.add_task(write_dump, settings.data_dir, dump_name_for_detail(recipe_id), data)
    return {"fromCache": False, "data": data}
