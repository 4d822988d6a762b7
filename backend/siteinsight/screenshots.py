"""Full-page desktop + mobile captures, stored as WebP files."""

import asyncio
import uuid
from pathlib import Path

from siteinsight.config import Settings
from siteinsight.image_utils import png_to_webp


CAP_HEIGHT_JS = '''(maxHeight) => {
    for (const el of [document.documentElement, document.body]) {
        el.style.maxHeight = maxHeight + 'px';
        el.style.overflow = 'hidden';
    }
}'''

UNCAP_HEIGHT_JS = '''() => {
    for (const el of [document.documentElement, document.body]) {
        el.style.maxHeight = '';
        el.style.overflow = '';
    }
}'''


def screenshot_filename(viewport: str, shot_id: str) -> str:
    return f"{viewport}-{shot_id}.webp"


def _write_webp(png_bytes: bytes, path: Path, quality: int) -> None:
    path.write_bytes(png_to_webp(png_bytes, quality=quality))


async def _full_page_png(page, settings: Settings) -> bytes:
    await page.evaluate("window.scrollTo(0, 0)")
    page_height = await page.evaluate("document.body ? document.body.scrollHeight : 0")

    # Cap page height to avoid OOM on very tall pages
    capped = page_height > settings.max_full_page_height
    if capped:
        # maxHeight alone leaves the scroll height untouched; overflow clips it
        await page.evaluate(CAP_HEIGHT_JS, settings.max_full_page_height)
    try:
        return await page.screenshot(full_page=True, type="png")
    finally:
        if capped:
            await page.evaluate(UNCAP_HEIGHT_JS)


async def _capture(page, settings: Settings, viewport: str, shot_id: str, warnings: list[str]) -> str | None:
    filename = screenshot_filename(viewport, shot_id)
    try:
        png = await _full_page_png(page, settings)
        await asyncio.to_thread(_write_webp, png, Path(settings.screenshots_dir) / filename, settings.webp_quality)
    except Exception as e:
        print(f"  [screenshot] {viewport} capture failed: {e}")
        warnings.append(f"{viewport.capitalize()} screenshot failed")
        return None
    return filename


async def capture_screenshots(page, settings: Settings, warnings: list[str]) -> tuple[str | None, str | None]:
    """
    Desktop capture at the page's current viewport, then resize to the
    mobile footprint and capture again. Both files share one random id.
    """
    shot_id = str(uuid.uuid4())

    desktop = await _capture(page, settings, "desktop", shot_id, warnings)

    mobile = None
    try:
        await page.set_viewport_size({"width": settings.mobile_width, "height": settings.mobile_height})
        await page.wait_for_timeout(500)
    except Exception as e:
        print(f"  [screenshot] Mobile viewport resize failed: {e}")
        warnings.append("Mobile screenshot failed")
    else:
        mobile = await _capture(page, settings, "mobile", shot_id, warnings)

    return desktop, mobile
