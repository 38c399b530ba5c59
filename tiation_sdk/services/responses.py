"""Decoding of API response bodies into models."""

from typing import Any, Callable, Dict, Iterable, TypeVar

from ..exceptions import ApiError
from ..models.content import Page

T = TypeVar("T")

DECODE_ERRORS = (TypeError, ValueError, KeyError, AttributeError)


def invalid_response(message: str) -> ApiError:
    return ApiError(message, code="invalid_response")


def expect_object(response: Any, required: Iterable[str] = ("id",)) -> Dict[str, Any]:
    """Return response as a dict, or raise ApiError if it is not a JSON object with the required keys."""
    if not isinstance(response, dict):
        raise invalid_response(f"Expected a JSON object in the response, got {type(response).__name__}")
    missing = [key for key in required if response.get(key) in (None, "")]
    if missing:
        raise invalid_response(f"Response is missing fields: {', '.join(missing)}")
    return response


def decode_model(factory: Callable[[Dict[str, Any]], T], response: Any, required: Iterable[str] = ("id",)) -> T:
    """Build a model from a response body."""
    body = expect_object(response, required)
    try:
        return factory(body)
    except DECODE_ERRORS as e:
        raise invalid_response(f"Could not decode response: {e}")


def decode_page(factory: Callable[[Dict[str, Any]], T], response: Any, required: Iterable[str] = ("id",)) -> Page:
    """Build a Page from a list response; every item must carry the required keys."""
    if response is None:
        response = {}
    body = expect_object(response, required=())
    items = body.get("data") or body.get("items") or []
    if not isinstance(items, list):
        raise invalid_response("Expected a list of items in the response")
    for item in items:
        expect_object(item, required)
    try:
        return Page.from_dict(body, factory)
    except DECODE_ERRORS as e:
        raise invalid_response(f"Could not decode response: {e}")
