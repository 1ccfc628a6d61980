"""Deterministic cache keys built from request parameters."""

import hashlib
import json
from urllib.parse import quote


def sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def canonicalize_query(params: dict) -> str:
    """Stable `k=v&k=v` form of a query: unset values dropped, keys sorted."""
    parts = []
    for name in sorted(params):
        value = params[name]
        if value is None or value == "":
            continue
        parts.append(f"{name}={value}")
    return "&".join(parts)


def set_params(params: dict) -> dict:
    """Params with unset (None) values removed, in their original order."""
    return {name: value for name, value in params.items() if value is not None}


def search_key(params: dict) -> str:
    canonical = canonicalize_query(params)
    return f"recipes:search:{sha256(canonical or 'empty')}"


def detail_key(recipe_id: str | int) -> str:
    return f"recipes:info:{recipe_id}"


def dump_name_for_search(params: dict) -> str:
    """File name for a search dump, hashed from the params that were set."""
    return f"search_{sha256(json.dumps(set_params(params), sort_keys=True))}.json"


def dump_name_for_detail(recipe_id: str | int) -> str:
    """File name for a detail dump; the id is percent-encoded so it stays one path component."""
    return f"detail_{quote(str(recipe_id), safe='')}.json"
