import pytest

from siteinsight.url_validator import is_valid_url


@pytest.mark.parametrize(
    "value",
    [
        "https://example.com",
        "http://example.com/a/b?q=1#frag",
        "https://sub.example.co.uk:8443/path",
        "http://localhost:5000",
        "http://127.0.0.1",
        "  https://example.com  ",          # surrounding whitespace is trimmed
        "ftp://files.example.com/pub",      # no scheme allowlist
        "file:///etc/hosts",
    ],
)
def test_accepts_absolute_urls(value):
    assert is_valid_url(value) is True


@pytest.mark.parametrize(
    "value",
    [
        None,
        "",
        "   ",
        "not a url",
        "example.com",
        "/relative/path",
        "https://",
        "http://:80",
        "https://exa mple.com",
        "http://example.com:99999",
        "http://example.com:port",
        "mailto:someone@example.com",
        "javascript:alert(1)",
        42,
        ["https://example.com"],
    ],
)
def test_rejects_everything_else(value):
    assert is_valid_url(value) is False
