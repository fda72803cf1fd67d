import pytest

from page_inspector.utils.paths import resolve_url

BASE = "https://example.com/dir/page.html"


@pytest.mark.parametrize(
    "relative, expected",
    [
        ("/a.png", "https://example.com/a.png"),
        ("b.png", "https://example.com/dir/b.png"),
        ("../c.png", "https://example.com/c.png"),
        ("//cdn.example.net/x.js", "https://cdn.example.net/x.js"),
        ("  /spaced.css  ", "https://example.com/spaced.css"),
        ("http://other.example/d.png", "http://other.example/d.png"),
        ("?q=1", "https://example.com/dir/page.html?q=1"),
    ],
)
def test_resolve_relative(relative, expected):
    assert resolve_url(BASE, relative) == expected


@pytest.mark.parametrize("relative", [None, "", "   ", "http://[broken/x"])
def test_resolve_failures_return_none(relative):
    assert resolve_url(BASE, relative) is None


def test_non_http_schemes_are_resolved_not_filtered():
    assert resolve_url(BASE, "javascript:void(0)") == "javascript:void(0)"


def test_relative_without_base_fails():
    assert resolve_url("", "/a.png") is None

