"""Keyword-scoring category classifier over page title + visible text."""

from dataclasses import dataclass, field

from siteinsight.rules import GENERIC_LABEL, CategoryRule


MAX_CATEGORIES = 6


@dataclass(frozen=True)
class Classification:
    website_type: str
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    related_phrases: list[str] = field(default_factory=list)


def score_rules(text: str, rules: tuple[CategoryRule, ...]) -> list[tuple[CategoryRule, int]]:
    """Score every rule by how many of its keywords occur in `text`."""
    text = (text or "").lower()
    return [(rule, sum(1 for k in rule.keywords if k in text)) for rule in rules]


def classify(text: str, rules: tuple[CategoryRule, ...]) -> Classification:
    """
    Rank matching rules by score. The top label is the first rule (in table
    order) to reach the highest score, or GENERIC_LABEL when nothing matches.
    """
    scored = [(rule, score) for rule, score in score_rules(text, rules) if score > 0]
    # sorted() is stable, so equal scores keep table order
    scored.sort(key=lambda pair: pair[1], reverse=True)

    categories = [rule.label for rule, _ in scored[:MAX_CATEGORIES]]
    tags = list(dict.fromkeys(t for rule, _ in scored for t in rule.tags))

    return Classification(
        website_type=categories[0] if categories else GENERIC_LABEL,
        categories=categories,
        tags=tags,
        related_phrases=[f"websites similar to {c.lower()} platforms" for c in categories],
    )
