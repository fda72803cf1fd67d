import pytest

from page_inspector.inspector.safety import is_blocked_url


@pytest.mark.parametrize(
    "url",
    [
        "ftp://example.com/file.txt",
        "file:///etc/passwd",
        "javascript:alert(1)",
        "data:image/png;base64,AAAA",
        "http://localhost/",
        "http://LOCALHOST:8080/admin",
        "http://127.0.0.1/",
        "http://127.1.2.3/",
        "http://[::1]/",
        "http://printer.local/",
        "http://10.0.0.5/",
        "https://192.168.1.1/router",
        "http://169.254.169.254/latest/meta-data/",
        "not a url",
        "",
        "http://",
        "https:///path-only",
        "http://[bad-ipv6/",
    ],
)
def test_blocked_urls(url):
    assert is_blocked_url(url) is True


@pytest.mark.parametrize(
    "url",
    [
        "http://example.com/",
        "https://example.com/page?x=1#top",
        "https://cdn.example.org:8443/a.js",
        "HTTPS://Example.COM/",
        "http://8.8.8.8/",
        "http://172.16.0.1/",
        "https://localhost.example.com/",
    ],
)
def test_public_urls_pass(url):
    assert is_blocked_url(url) is False


def test_prefix_check_is_textual():
    # Host names that merely start with a private prefix are blocked too.
    assert is_blocked_url("http://10.example.com/") is True
    # Encoded private addresses are not recognised.
    assert is_blocked_url("http://2130706433/") is False
