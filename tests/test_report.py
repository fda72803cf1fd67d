from page_inspector.inspector.models import MainDocument, ProbeResult
from page_inspector.inspector.report import build_report

MAIN = MainDocument(status=200, ok=True, content_type="text/html", time_ms=5)


def test_main_document_is_excluded_from_resources():
    results = [
        ProbeResult(url="https://example.com/a.js", status=200, ok=True),
        ProbeResult(url="https://example.com/", status=200, ok=True),
        ProbeResult(url="https://example.com/b.png", error="timeout"),
    ]

    report = build_report("https://example.com/", MAIN, results)

    assert report.main is MAIN
    assert [r.url for r in report.resources] == [
        "https://example.com/a.js",
        "https://example.com/b.png",
    ]


def test_resources_are_truncated_to_the_cap():
    results = [ProbeResult(url=f"https://example.com/{i}.png") for i in range(10)]

    report = build_report("https://example.com/", MAIN, results, max_resources=3)

    assert [r.url for r in report.resources] == [
        "https://example.com/0.png",
        "https://example.com/1.png",
        "https://example.com/2.png",
    ]


def test_note_mentions_cap_and_dynamic_resources():
    report = build_report("https://example.com/", MAIN, [])
    assert "Limited to 200 resources" in report.note
    assert "page JS" in report.note
    assert report.to_dict()["resources"] == []
