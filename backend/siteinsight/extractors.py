"""
Read-only signal extractors over a rendered page.

Each `extract_*` coroutine runs one page.evaluate() pass and post-processes
the raw values in Python. They raise on failure; the analyzer decides what
to fall back to.
"""

import re


# === COLORS ===

COLORS_JS = '''(maxElements) => {
    const values = [];
    const els = document.querySelectorAll('*');
    const n = Math.min(els.length, maxElements);
    for (let i = 0; i < n; i++) {
        const s = getComputedStyle(els[i]);
        if (s.color) values.push(s.color);
        if (s.backgroundColor) values.push(s.backgroundColor);
    }
    return values;
}'''

_RGB_RE = re.compile(
    r"rgba?\(\s*(\d+(?:\.\d+)?)[\s,]+(\d+(?:\.\d+)?)[\s,]+(\d+(?:\.\d+)?)"
    r"\s*(?:[,/]\s*(\d*\.?\d+)%?)?\s*\)",
    re.IGNORECASE,
)


def rgb_to_hex(value: str) -> str | None:
    """
    'rgb(255, 87, 51)' -> '#ff5733'. Returns None for fully transparent
    colors and anything that is not rgb()/rgba() text.
    """
    match = _RGB_RE.fullmatch((value or "").strip())
    if not match:
        return None
    r, g, b, alpha = match.groups()
    if alpha is not None and float(alpha) == 0:
        return None
    channels = [max(0, min(255, round(float(c)))) for c in (r, g, b)]
    return "#" + "".join(f"{c:02x}" for c in channels)


def collect_colors(raw_values: list, limit: int) -> list[str]:
    colors: list[str] = []
    for value in raw_values:
        hex_color = rgb_to_hex(value) if isinstance(value, str) else None
        if hex_color and hex_color not in colors:
            colors.append(hex_color)
            if len(colors) >= limit:
                break
    return colors


async def extract_colors(page, max_elements: int = 1500, limit: int = 25) -> list[str]:
    raw = await page.evaluate(COLORS_JS, max_elements)
    return collect_colors(raw or [], limit)


# === FONTS ===

FONTS_JS = '''(maxElements) => {
    const families = new Set();
    const els = document.querySelectorAll('*');
    const n = Math.min(els.length, maxElements);
    for (let i = 0; i < n; i++) {
        const f = getComputedStyle(els[i]).fontFamily;
        if (f) families.add(f);
    }
    return [...families];
}'''

# CSS-wide keywords plus the bare generic families
_IGNORED_FONTS = {"inherit", "initial", "unset", "revert", "sans-serif", "serif"}


def normalize_fonts(raw_families: list, limit: int) -> list[str]:
    """Split fallback lists, strip quoting, lowercase, dedupe, cap."""
    fonts: list[str] = []
    for family in raw_families:
        if not isinstance(family, str):
            continue
        for font in family.split(","):
            clean = font.replace('"', "").replace("'", "").strip().lower()
            if not clean or clean in _IGNORED_FONTS or clean in fonts:
                continue
            fonts.append(clean)
            if len(fonts) >= limit:
                return fonts
    return fonts


def classify_font(name: str) -> str:
    name = (name or "").lower()
    if "mono" in name:
        return "monospace"
    if "serif" in name and "sans" not in name:
        return "serif"
    return "sans-serif"


def font_types(fonts: list[str]) -> list[str]:
    return list(dict.fromkeys(classify_font(f) for f in fonts))


async def extract_fonts(page, max_elements: int = 1500, limit: int = 10) -> list[str]:
    raw = await page.evaluate(FONTS_JS, max_elements)
    return normalize_fonts(raw or [], limit)


# === TAGS ===

TAGS_JS = '''() => {
    const meta = document.querySelector('meta[name="keywords" i]');
    return {
        keywords: meta ? (meta.getAttribute('content') || '') : '',
        headings: [...document.querySelectorAll('h1, h2')].map(h => h.innerText || ''),
    };
}'''

MAX_HEADING_TAG_LENGTH = 50


def collect_tags(keywords: str, headings: list, limit: int) -> list[str]:
    candidates = (keywords or "").split(",")
    candidates += [h for h in headings if isinstance(h, str) and len(h.strip()) < MAX_HEADING_TAG_LENGTH]

    tags: list[str] = []
    for candidate in candidates:
        tag = " ".join(candidate.split()).lower()
        if tag and tag not in tags:
            tags.append(tag)
            if len(tags) >= limit:
                break
    return tags


async def extract_tags(page, limit: int = 10) -> list[str]:
    raw = await page.evaluate(TAGS_JS) or {}
    return collect_tags(raw.get("keywords", ""), raw.get("headings") or [], limit)


# === PAGE TEXT (classification input) ===

PAGE_TEXT_JS = '''(limit) => {
    const body = document.body ? document.body.innerText.slice(0, limit) : '';
    return (document.title || '') + ' ' + body;
}'''


async def extract_page_text(page, limit: int = 6000) -> str:
    return await page.evaluate(PAGE_TEXT_JS, limit) or ""
