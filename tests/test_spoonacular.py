"""Tests for the Spoonacular client — param mapping and error normalization."""

import httpx
import pytest

from conftest import make_spoonacular
from errors import (
    UpstreamPayloadError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from services.spoonacular import build_search_params


class TestBuildSearchParams:
    def test_maps_names(self):
        params = build_search_params({
            "q": "pasta",
            "ingredients": "tomato,basil",
            "cuisine": "italian",
            "maxReadyTime": 30,
        })
        assert params["query"] == "pasta"
        assert params["includeIngredients"] == "tomato,basil"
        assert params["cuisine"] == "italian"
        assert params["maxReadyTime"] == 30
        assert "q" not in params

    def test_unset_params_omitted(self):
        params = build_search_params({"q": None, "diet": ""})
        assert params == {"number": 10, "offset": 0}

    def test_pagination_offset(self):
        params = build_search_params({"page": 3, "pageSize": 20})
        assert params["number"] == 20
        assert params["offset"] == 40

    def test_page_size_clamped(self):
        assert build_search_params({"pageSize": 500})["number"] == 100
        assert build_search_params({"pageSize": -1})["number"] == 1

    def test_page_floor_is_one(self):
        assert build_search_params({"page": 0})["offset"] == 0


@pytest.mark.asyncio
async def test_search_sends_api_key_and_path():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"results": [], "totalResults": 0})

    client = make_spoonacular(handler)
    try:
        data = await client.search_recipes({"q": "curry"})
    finally:
        await client.aclose()

    assert data == {"results": [], "totalResults": 0}
    assert seen["path"] == "/recipes/complexSearch"
    assert seen["params"]["apiKey"] == "test-key"
    assert seen["params"]["query"] == "curry"
    assert seen["params"]["number"] == "10"


@pytest.mark.asyncio
async def test_detail_path():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/recipes/716429/information"
        return httpx.Response(200, json={"id": 716429})

    client = make_spoonacular(handler)
    try:
        assert await client.get_recipe_information("716429") == {"id": 716429}
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_status_error_carries_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"message": "quota exceeded"})

    client = make_spoonacular(handler)
    try:
        with pytest.raises(UpstreamStatusError) as exc_info:
            await client.search_recipes({})
    finally:
        await client.aclose()

    assert exc_info.value.status == 429
    assert exc_info.value.data == {"message": "quota exceeded"}


@pytest.mark.asyncio
async def test_timeout_normalized():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_spoonacular(handler)
    try:
        with pytest.raises(UpstreamTimeoutError):
            await client.search_recipes({})
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_connect_error_normalized():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_spoonacular(handler)
    try:
        with pytest.raises(UpstreamUnavailableError):
            await client.get_recipe_information(1)
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_non_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    client = make_spoonacular(handler)
    try:
        with pytest.raises(UpstreamPayloadError):
            await client.search_recipes({})
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_detail_requires_id():
    client = make_spoonacular(lambda request: httpx.Response(200, json={}))
    try:
        with pytest.raises(ValueError):
            await client.get_recipe_information("")
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_detail_id_slash_is_percent_encoded():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"id": 1})

    client = make_spoonacular(handler)
    try:
        await client.get_recipe_information("1/../similar")
    finally:
        await client.aclose()

    url = seen["url"]
    assert url.raw_path.startswith(b"/recipes/1%2F..%2Fsimilar/information")
    assert dict(url.params) == {"apiKey": "test-key"}


@pytest.mark.asyncio
async def test_detail_id_query_chars_stay_in_path():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"id": 1})

    client = make_spoonacular(handler)
    try:
        await client.get_recipe_information("1?number=9#")
    finally:
        await client.aclose()

    assert seen["url"].path == "/recipes/1?number=9#/information"
    assert dict(seen["url"].params) == {"apiKey": "test-key"}
