"""
Get a loaded page into a state worth measuring: settled network, eager
images, lazy content scrolled into existence.

Only navigation is fatal. The other steps log and record a warning when they
fail, and the page is analyzed in whatever state it reached.
"""

from siteinsight.config import Settings
from siteinsight.errors import NavigationError


FORCE_EAGER_IMAGES_JS = '''() => {
    document.querySelectorAll('img[loading="lazy"]').forEach(img => {
        img.loading = 'eager';
    });
    document.querySelectorAll('img[data-src], img[data-srcset]').forEach(img => {
        if (img.dataset.src) img.src = img.dataset.src;
        if (img.dataset.srcset) img.srcset = img.dataset.srcset;
    });
}'''

# Scroll to trigger lazy loading (capped to avoid infinite scroll pages)
AUTO_SCROLL_JS = '''async ({ distance, interval, maxScroll, maxIterations }) => {
    await new Promise(resolve => {
        let total = 0;
        let iterations = 0;
        const timer = setInterval(() => {
            window.scrollBy(0, distance);
            total += distance;
            iterations++;
            const height = document.body ? document.body.scrollHeight : 0;
            if (total >= height || total >= maxScroll || iterations >= maxIterations) {
                clearInterval(timer);
                window.scrollTo(0, 0);
                resolve();
            }
        }, interval);
    });
}'''


async def navigate(page, url: str, settings: Settings, warnings: list[str]) -> None:
    """DOM content loaded is enough; full resource completion is not awaited."""
    try:
        response = await page.goto(url, wait_until="domcontentloaded", timeout=settings.navigation_timeout)
    except Exception as e:
        raise NavigationError(f"Failed to load {url}: {e}") from e

    if response is not None and response.status >= 400:
        warnings.append(f"Page responded with HTTP {response.status}")


async def stabilize(page, settings: Settings) -> None:
    try:
        await page.wait_for_load_state("networkidle", timeout=settings.network_idle_timeout)
    except Exception as e:
        # Long-polling pages never go idle; carry on with what rendered
        print(f"  [prepare] Network idle wait abandoned: {e}")
    await page.wait_for_timeout(settings.settle_delay)


async def force_eager_images(page) -> None:
    await page.evaluate(FORCE_EAGER_IMAGES_JS)


async def auto_scroll(page, settings: Settings) -> None:
    await page.evaluate(AUTO_SCROLL_JS, {
        "distance": settings.scroll_step,
        "interval": settings.scroll_interval,
        "maxScroll": settings.max_scroll_distance,
        "maxIterations": settings.max_scroll_iterations,
    })
    await page.wait_for_timeout(500)


async def prepare_page(page, settings: Settings, warnings: list[str]) -> None:
    """Run the post-navigation steps in order, each on its own."""
    steps = [
        ("stabilize", lambda: stabilize(page, settings)),
        ("eager images", lambda: force_eager_images(page)),
    ]
    if settings.auto_scroll:
        steps.append(("auto-scroll", lambda: auto_scroll(page, settings)))

    for name, step in steps:
        try:
            await step()
        except Exception as e:
            print(f"  [prepare] {name} failed: {e}")
            warnings.append(f"Page preparation step '{name}' failed")
