import json

import pytest

from page_inspector import main as cli
from page_inspector.errors import MainFetchError
from page_inspector.inspector import PageInspector
from page_inspector.inspector.models import InspectionReport, MainDocument, ProbeResult

REPORT = InspectionReport(
    fetched_url="https://example.com/",
    main=MainDocument(status=200, ok=True, content_type="text/html", time_ms=8),
    resources=[
        ProbeResult(url="https://example.com/a.js", status=200, ok=True, time_ms=3),
        ProbeResult(url="https://example.com/b.png", error="TimeoutError", time_ms=20000),
    ],
    note="Limited to 200 resources.",
)


def test_default_arguments():
    args = cli.parse_arguments(["--url", "https://example.com"])
    assert args.max_resources == 200
    assert args.concurrency == 8
    assert args.timeout == 20000
    assert args.output is None


@pytest.mark.asyncio()
async def test_writes_json_report(tmp_path, monkeypatch):
    seen = {}

    async def fake_inspect(self, url):
        seen["url"] = url
        seen["probe_timeout"] = self.probe_timeout
        return REPORT

    monkeypatch.setattr(PageInspector, "inspect", fake_inspect)
    out = tmp_path / "report.json"

    code = await cli.main(["--url", "https://example.com/", "-o", str(out), "--timeout", "5000", "-q"])

    assert code == 0
    assert seen == {"url": "https://example.com/", "probe_timeout": 5.0}
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["fetchedUrl"] == "https://example.com/"
    assert data["resources"][1]["error"] == "TimeoutError"


@pytest.mark.asyncio()
async def test_blocked_url_exits_with_error():
    assert await cli.main(["--url", "http://localhost/", "-q"]) == 1


@pytest.mark.asyncio()
async def test_fetch_failure_exits_with_error(monkeypatch):
    async def fake_inspect(self, url):
        raise MainFetchError(url, "Connection refused")

    monkeypatch.setattr(PageInspector, "inspect", fake_inspect)

    assert await cli.main(["--url", "https://example.com/", "-q"]) == 1


def test_print_summary_renders(capsys):
    cli.print_summary(REPORT)
    assert "2 resources, 1 not ok" in capsys.readouterr().out
