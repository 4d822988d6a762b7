import asyncio
import io

from PIL import Image

from conftest import FakePage, png_bytes
from siteinsight.image_utils import WEBP_MAX_DIMENSION, png_to_webp
from siteinsight.screenshots import CAP_HEIGHT_JS, UNCAP_HEIGHT_JS, capture_screenshots, screenshot_filename


def test_png_is_reencoded_as_webp():
    out = png_to_webp(png_bytes(40, 60))

    img = Image.open(io.BytesIO(out))
    assert img.format == "WEBP"
    assert img.size == (40, 60)


def test_very_tall_capture_is_cropped_to_webp_limit():
    buf = io.BytesIO()
    Image.new("L", (8, WEBP_MAX_DIMENSION + 500)).save(buf, format="PNG")

    img = Image.open(io.BytesIO(png_to_webp(buf.getvalue())))

    assert img.size == (8, WEBP_MAX_DIMENSION)


def test_filenames_share_id_across_viewports():
    assert screenshot_filename("desktop", "abc") == "desktop-abc.webp"
    assert screenshot_filename("mobile", "abc") == "mobile-abc.webp"


class RecordingPage(FakePage):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = []

    async def evaluate(self, script, arg=None):
        self.calls.append((script, arg))
        return await super().evaluate(script, arg)


def test_tall_page_is_clipped_before_capture_and_restored(settings):
    settings.screenshots_dir.mkdir(parents=True)
    settings.max_full_page_height = 1000  # fake page reports 1200
    page = RecordingPage()

    desktop, mobile = asyncio.run(capture_screenshots(page, settings, []))

    assert desktop and mobile
    scripts = [script for script, _ in page.calls]
    assert scripts.count(CAP_HEIGHT_JS) == scripts.count(UNCAP_HEIGHT_JS) == 2
    assert (CAP_HEIGHT_JS, 1000) in page.calls
    assert "overflow = 'hidden'" in CAP_HEIGHT_JS
    assert scripts.index(CAP_HEIGHT_JS) < scripts.index(UNCAP_HEIGHT_JS)


def test_short_page_is_not_clipped(settings):
    settings.screenshots_dir.mkdir(parents=True)
    page = RecordingPage()

    asyncio.run(capture_screenshots(page, settings, []))

    assert CAP_HEIGHT_JS not in [script for script, _ in page.calls]
