"""
Analysis pipeline: navigate -> prepare -> extract signals -> screenshots.

Single-URL analysis owns a browser for the whole request. Bulk analysis
reuses one browser across a sequential loop and isolates each URL, so one
bad site never stops the rest of the batch.
"""

from pathlib import Path

from siteinsight.browser import BrowserSession, browser_session
from siteinsight.classifier import classify
from siteinsight.config import Settings
from siteinsight.extractors import (
    extract_colors,
    extract_fonts,
    extract_page_text,
    extract_tags,
    font_types,
)
from siteinsight.preparation import navigate, prepare_page
from siteinsight.rules import CategoryRule
from siteinsight.schemas import AnalysisResult, BulkAnalyzeResponse, BulkItem
from siteinsight.screenshots import capture_screenshots
from siteinsight.url_validator import is_valid_url


async def _attempt(name: str, coro, default, warnings: list[str]):
    """Await one extractor; on failure fall back to `default` and note it."""
    try:
        return await coro
    except Exception as e:
        print(f"  [analyze] {name} extraction failed: {e}")
        warnings.append(f"{name} extraction failed")
        return default


async def analyze_page(
    session: BrowserSession,
    url: str,
    settings: Settings,
    rules: tuple[CategoryRule, ...],
) -> AnalysisResult:
    warnings: list[str] = []

    async with session.page() as page:
        await navigate(page, url, settings, warnings)
        await prepare_page(page, settings, warnings)

        website_name = await _attempt("Title", page.title(), "", warnings)
        text = await _attempt(
            "Page text", extract_page_text(page, settings.category_text_limit), "", warnings,
        )
        colors = await _attempt(
            "Color", extract_colors(page, settings.max_style_elements, settings.max_colors), [], warnings,
        )
        fonts = await _attempt(
            "Font", extract_fonts(page, settings.max_style_elements, settings.max_fonts), [], warnings,
        )
        tags = await _attempt("Tag", extract_tags(page, settings.max_tags), [], warnings)

        desktop, mobile = await capture_screenshots(page, settings, warnings)

    classification = classify(text, rules)

    return AnalysisResult(
        url=url,
        website_name=website_name,
        category=classification.website_type,
        website_type=classification.website_type,
        categories=classification.categories,
        tags=list(dict.fromkeys(tags + classification.tags))[:settings.max_merged_tags],
        related_phrases=classification.related_phrases,
        colors=colors,
        fonts=fonts,
        font_types=font_types(fonts),
        desktop=desktop,
        mobile=mobile,
        desktop_screenshot=desktop,
        mobile_screenshot=mobile,
        warnings=warnings,
    )


async def analyze_url(url: str, settings: Settings, rules: tuple[CategoryRule, ...]) -> AnalysisResult:
    """Analyze one URL in its own browser. Raises AnalysisError on fatal failure."""
    Path(settings.screenshots_dir).mkdir(parents=True, exist_ok=True)

    async with browser_session(settings) as session:
        print(f"[analyze] {url}")
        result = await analyze_page(session, url, settings, rules)

    print(f"[analyze] Done {url} ({result.category}, {len(result.warnings)} warnings)")
    return result


async def analyze_bulk(urls: list, settings: Settings, rules: tuple[CategoryRule, ...]) -> BulkAnalyzeResponse:
    """
    Analyze `urls` one after another inside a single browser.
    Results keep input order; a failed URL becomes an error entry.
    """
    Path(settings.screenshots_dir).mkdir(parents=True, exist_ok=True)
    results: list[BulkItem] = []

    async with browser_session(settings) as session:
        for i, url in enumerate(urls, start=1):
            if not is_valid_url(url):
                results.append(BulkItem(url=url, success=False, error="Invalid URL"))
                continue

            print(f"[analyze-bulk] ({i}/{len(urls)}) {url}")
            try:
                data = await analyze_page(session, url, settings, rules)
            except Exception as e:
                print(f"[analyze-bulk] Failed {url}: {e}")
                results.append(BulkItem(url=url, success=False, error="Analysis failed"))
            else:
                results.append(BulkItem(url=url, success=True, data=data))

    succeeded = sum(1 for r in results if r.success)
    return BulkAnalyzeResponse(
        total=len(urls),
        success=succeeded,
        failed=len(results) - succeeded,
        results=results,
    )
