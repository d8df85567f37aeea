import pytest

from shot_api.exceptions import ValidationError
from shot_api.models import DESKTOP_VIEWPORT
from shot_api.validation import (
    is_valid_url,
    parse_batch_request,
    parse_screenshot_request,
)


class TestIsValidUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "http://example.com",
            "https://example.com/path?x=1",
            "HTTPS://Example.com",
            "https://localhost:8080/",
            "http://[::1]/",
        ],
    )
    def test_accepts_http_and_https(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://example.com",
            "file:///etc/passwd",
            "javascript:alert(1)",
            "not-a-url",
            "example.com",
            "https://",
            "http://host:port/",
            "http://[::1/",
            "http://exa mple.com",
            "http://exa<mple.com",
        ],
    )
    def test_rejects_other_schemes_and_garbage(self, url):
        assert not is_valid_url(url)


class TestParseScreenshotRequest:
    def test_defaults(self):
        request = parse_screenshot_request({"url": "https://example.com"})

        assert request.url == "https://example.com"
        assert request.delay_ms == 0
        assert request.full_page is True
        assert request.viewport == DESKTOP_VIEWPORT

    @pytest.mark.parametrize("params", [{}, {"url": ""}])
    def test_missing_url(self, params):
        with pytest.raises(ValidationError, match="Missing url"):
            parse_screenshot_request(params)

    def test_invalid_url(self):
        with pytest.raises(ValidationError, match="Invalid URL"):
            parse_screenshot_request({"url": "ftp://example.com"})

    @pytest.mark.parametrize(
        "value,expected", [("true", True), ("1", True), ("false", False), ("0", False)]
    )
    def test_full_page_values(self, value, expected):
        request = parse_screenshot_request(
            {"url": "https://example.com", "fullPage": value}
        )
        assert request.full_page is expected

    @pytest.mark.parametrize("value", ["TRUE", "yes", "", "2", "False"])
    def test_invalid_full_page(self, value):
        with pytest.raises(ValidationError, match="Invalid fullPage"):
            parse_screenshot_request({"url": "https://example.com", "fullPage": value})

    def test_delay(self):
        request = parse_screenshot_request({"url": "https://example.com", "delay": "250"})
        assert request.delay_ms == 250

    def test_empty_delay_is_absent(self):
        request = parse_screenshot_request({"url": "https://example.com", "delay": ""})
        assert request.delay_ms == 0

    @pytest.mark.parametrize("value", ["-1", "abc", "1.5", "10ms"])
    def test_invalid_delay(self, value):
        with pytest.raises(ValidationError, match="Invalid delay"):
            parse_screenshot_request({"url": "https://example.com", "delay": value})

    @pytest.mark.parametrize(
        "params",
        [
            {"width": "0"},
            {"height": "-5"},
            {"width": "wide"},
            {"width": "100", "height": "1e3"},
        ],
    )
    def test_invalid_dimensions(self, params):
        with pytest.raises(ValidationError, match="Invalid width or height"):
            parse_screenshot_request({"url": "https://example.com", **params})

    def test_only_width_falls_back_to_600_high(self):
        request = parse_screenshot_request({"url": "https://example.com", "width": "1280"})
        assert (request.viewport.width, request.viewport.height) == (1280, 600)

    def test_only_height_falls_back_to_800_wide(self):
        request = parse_screenshot_request({"url": "https://example.com", "height": "720"})
        assert (request.viewport.width, request.viewport.height) == (800, 720)

    def test_url_is_checked_before_other_params(self):
        with pytest.raises(ValidationError, match="Invalid URL"):
            parse_screenshot_request({"url": "nope", "delay": "-1"})


class TestParseBatchRequest:
    def test_drops_invalid_entries_in_order(self):
        request = parse_batch_request(
            {"urls": "https://a.test,not-a-url,https://b.test"}
        )
        assert request.urls == ["https://a.test", "https://b.test"]

    def test_trims_and_skips_empty_tokens(self):
        request = parse_batch_request({"urls": " https://a.test , ,,https://b.test "})
        assert request.urls == ["https://a.test", "https://b.test"]

    @pytest.mark.parametrize("params", [{}, {"urls": ""}])
    def test_missing_urls(self, params):
        with pytest.raises(ValidationError, match="Missing urls"):
            parse_batch_request(params)

    @pytest.mark.parametrize("raw", [",, ,", "ftp://a.test,nope"])
    def test_no_valid_urls(self, raw):
        with pytest.raises(ValidationError, match="No valid URLs"):
            parse_batch_request({"urls": raw})
