import re
from typing import Mapping, Optional

import pydantic
from pydantic import AnyUrl, TypeAdapter

from shot_api.exceptions import ValidationError
from shot_api.models import BatchRequest, ScreenshotRequest

ALLOWED_SCHEMES = ("http", "https")
FULL_PAGE_VALUES = {"true": True, "1": True, "false": False, "0": False}

_INTEGER = re.compile(r"[+-]?[0-9]+")
_URL = TypeAdapter(AnyUrl)


def is_valid_url(value: str) -> bool:
    """Check that ``value`` parses as an absolute http(s) URL with a host."""
    try:
        url = _URL.validate_python(value)
    except pydantic.ValidationError:
        return False
    return url.scheme in ALLOWED_SCHEMES and bool(url.host)


def _parse_int(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    if not _INTEGER.fullmatch(value):
        raise ValueError(value)
    return int(value)


def parse_screenshot_request(params: Mapping[str, str]) -> ScreenshotRequest:
    """Turn raw ``/screenshot`` query parameters into a ScreenshotRequest."""
    url = params.get("url")
    if not url:
        raise ValidationError("Missing url query parameter.")
    if not is_valid_url(url):
        raise ValidationError("Invalid URL provided.")

    full_page = True
    if "fullPage" in params:
        if params["fullPage"] not in FULL_PAGE_VALUES:
            raise ValidationError("Invalid fullPage value. Use true or false.")
        full_page = FULL_PAGE_VALUES[params["fullPage"]]

    try:
        delay = _parse_int(params.get("delay"))
    except ValueError:
        raise ValidationError("Invalid delay value.")
    if delay is not None and delay < 0:
        raise ValidationError("Invalid delay value.")

    try:
        width = _parse_int(params.get("width"))
        height = _parse_int(params.get("height"))
    except ValueError:
        raise ValidationError("Invalid width or height value.")
    if (width is not None and width <= 0) or (height is not None and height <= 0):
        raise ValidationError("Invalid width or height value.")

    return ScreenshotRequest(
        url=url,
        delay_ms=delay or 0,
        width=width,
        height=height,
        full_page=full_page,
    )


def split_urls(raw: str) -> list[str]:
    return [token.strip() for token in raw.split(",") if token.strip()]


def parse_batch_request(params: Mapping[str, str]) -> BatchRequest:
    """Turn raw ``/batch-screenshot`` query parameters into a BatchRequest.

    Invalid URLs are dropped without being reported; the request only fails
    when nothing valid is left.
    """
    raw = params.get("urls")
    if not raw:
        raise ValidationError("Missing urls query parameter.")

    urls = [url for url in split_urls(raw) if is_valid_url(url)]
    if not urls:
        raise ValidationError("No valid URLs provided.")
    return BatchRequest(urls=urls)
