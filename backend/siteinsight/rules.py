"""
Category rule table for keyword-scoring classification.

The table is a tuple of frozen rules, built once at startup and shared
read-only by every request.
"""

import json
from dataclasses import dataclass
from pathlib import Path


GENERIC_LABEL = "General Website"


@dataclass(frozen=True)
class CategoryRule:
    label: str
    keywords: tuple[str, ...]
    tags: tuple[str, ...] = ()


DEFAULT_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        label="Technology",
        keywords=("software", "api", "cloud", "developer", "code"),
        tags=("tech", "software", "platform", "api", "developer"),
    ),
    CategoryRule(
        label="AI / Machine Learning",
        keywords=("ai", "machine learning", "llm", "chatbot", "automation"),
        tags=("ai", "ml", "chatbot", "automation"),
    ),
    CategoryRule(
        label="Education",
        keywords=("course", "learn", "academy", "training", "education"),
        tags=("education", "learning", "courses", "training"),
    ),
    CategoryRule(
        label="E-commerce",
        keywords=("shop", "cart", "checkout", "buy", "product"),
        tags=("shopping", "store", "products"),
    ),
    CategoryRule(
        label="Social Media",
        keywords=("social", "community", "followers", "share"),
        tags=("social-media", "community", "network"),
    ),
    CategoryRule(
        label="Entertainment",
        keywords=("movie", "music", "video", "entertainment", "stream"),
        tags=("fun", "movies", "music", "videos"),
    ),
    CategoryRule(
        label="Finance",
        keywords=("bank", "finance", "investment", "crypto"),
        tags=("finance", "banking", "investment"),
    ),
    CategoryRule(
        label="Healthcare",
        keywords=("health", "clinic", "medical", "doctor"),
        tags=("health", "medical", "fitness"),
    ),
)


def _clean_terms(raw) -> tuple[str, ...]:
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of strings, got {type(raw).__name__}")
    return tuple(str(t).strip().lower() for t in raw if str(t).strip())


def load_rules(path: Path | None) -> tuple[CategoryRule, ...]:
    """
    Load a rule table from a JSON file shaped like
    [{"label": ..., "keywords": [...], "tags": [...]}, ...].
    Returns DEFAULT_RULES when no path is configured.
    """
    if path is None:
        return DEFAULT_RULES

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list) or not data:
        raise ValueError(f"{path}: expected a non-empty JSON list of rules")

    rules = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: rule #{i} is not an object")
        label = str(item.get("label") or "").strip()
        if not label:
            raise ValueError(f"{path}: rule #{i} has no label")
        rules.append(CategoryRule(
            label=label,
            keywords=_clean_terms(item.get("keywords", [])),
            tags=_clean_terms(item.get("tags", [])),
        ))
    return tuple(rules)
