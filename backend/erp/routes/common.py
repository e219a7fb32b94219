# Overview: Request parsing shared by the API blueprints.

from flask import request

from ..validation import ValidationError


def list_args() -> dict:
    """page / limit / search query params of list endpoints."""
    search = request.args.get("search", type=str)
    return {
        "page": request.args.get("page", type=int),
        "limit": request.args.get("limit", type=int),
        "search": search.strip() if search and search.strip() else None,
    }


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")
    return payload


def pop_field(payload: dict, *names):
    """Remove and return the first of `names` present in the payload (camelCase or snake_case)."""
    value = None
    for name in names:
        if name in payload:
            value = payload.pop(name)
    return value
