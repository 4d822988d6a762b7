from __future__ import annotations

import io
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from PIL import Image

from siteinsight.config import Settings
from siteinsight.extractors import COLORS_JS, FONTS_JS, PAGE_TEXT_JS, TAGS_JS


# -----------------------------
# Test doubles
# -----------------------------
def png_bytes(width: int = 20, height: int = 30) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (255, 87, 51)).save(buf, format="PNG")
    return buf.getvalue()


DEFAULT_EVALUATE_RESULTS = {
    COLORS_JS: ["rgb(0, 0, 0)", "rgba(0, 0, 0, 0)", "rgb(255, 87, 51)", "rgb(0, 0, 0)"],
    FONTS_JS: ['"Inter", sans-serif', "Georgia, serif", '"JetBrains Mono", monospace'],
    TAGS_JS: {"keywords": "Design, Tools", "headings": ["Welcome Home", "x" * 80]},
    PAGE_TEXT_JS: "Acme Shop - buy products, add to cart and checkout today",
}


@dataclass
class FakeResponse:
    status: int = 200


class FakePage:
    """Stands in for a Playwright page; evaluate() answers by script text."""

    def __init__(
        self,
        evaluate_results: dict | None = None,
        title: str = "Acme Shop",
        status: int = 200,
        failing_urls: set[str] | None = None,
        screenshot_error: Exception | None = None,
    ):
        self.evaluate_results = dict(DEFAULT_EVALUATE_RESULTS)
        self.evaluate_results.update(evaluate_results or {})
        self._title = title
        self.status = status
        self.failing_urls = failing_urls or set()
        self.screenshot_error = screenshot_error
        self.visited: list[str] = []
        self.viewports: list[dict] = []

    async def goto(self, url, **kwargs):
        self.visited.append(url)
        if url in self.failing_urls:
            raise TimeoutError(f"Timeout 60000ms exceeded navigating to {url}")
        return FakeResponse(self.status)

    async def wait_for_load_state(self, state, timeout=None):
        return None

    async def wait_for_timeout(self, ms):
        return None

    async def evaluate(self, script, arg=None):
        result = self.evaluate_results.get(script)
        if isinstance(result, Exception):
            raise result
        if result is None and "scrollHeight" in script:
            return 1200
        return result

    async def title(self):
        return self._title

    async def screenshot(self, **kwargs):
        if self.screenshot_error:
            raise self.screenshot_error
        return png_bytes()

    async def set_viewport_size(self, size):
        self.viewports.append(size)


class FakeSession:
    def __init__(self, page_kwargs: dict, page_cls: type = FakePage):
        self.page_kwargs = page_kwargs
        self.page_cls = page_cls
        self.pages: list[FakePage] = []
        self.open_pages = 0

    @asynccontextmanager
    async def page(self):
        page = self.page_cls(**self.page_kwargs)
        self.pages.append(page)
        self.open_pages += 1
        try:
            yield page
        finally:
            self.open_pages -= 1


@dataclass
class FakeBrowser:
    page_kwargs: dict = field(default_factory=dict)
    launch_error: Exception | None = None
    launches: int = 0
    closed: int = 0
    sessions: list[FakeSession] = field(default_factory=list)

    @asynccontextmanager
    async def session(self, settings):
        if self.launch_error:
            raise self.launch_error
        self.launches += 1
        session = FakeSession(self.page_kwargs)
        self.sessions.append(session)
        try:
            yield session
        finally:
            self.closed += 1


# -----------------------------
# Fixtures
# -----------------------------
@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        screenshots_dir=tmp_path / "screenshots",
        submissions_file=tmp_path / "submissions.jsonl",
        settle_delay=0,
        network_idle_timeout=10,
    )


@pytest.fixture
def fake_browser(monkeypatch) -> FakeBrowser:
    browser = FakeBrowser()
    monkeypatch.setattr("siteinsight.analyzer.browser_session", browser.session)
    return browser
