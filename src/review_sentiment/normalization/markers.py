"""
Label marker tables for sentiment normalization.

Each supported engine vocabulary is described as data: a raw label is
routed to a category when its lowercased text contains one of the
category's markers, or equals one of its exact markers. Supporting a new
engine means adding markers here, never touching the normalizer's
control flow.

Vocabularies covered:
- Binary polarity (POSITIVE / NEGATIVE, LABEL_1 / LABEL_0)
- 5-star ratings ("1 star" .. "5 stars")
- Emotions (joy, love, sadness, anger, fear, ...)
"""

from dataclasses import dataclass

from review_sentiment.models.enums import SentimentCategory


@dataclass(frozen=True)
class MarkerRule:
    """
    Markers routing raw labels to one category.

    Attributes:
        category: Category assigned on match
        markers: Matched anywhere inside the label
        exact: Matched only against the whole label (index-style labels
            such as "label_1" would otherwise also hit "label_10")
    """

    category: SentimentCategory
    markers: frozenset[str] = frozenset()
    exact: frozenset[str] = frozenset()

    def matches(self, label: str) -> bool:
        return label in self.exact or any(marker in label for marker in self.markers)


@dataclass(frozen=True)
class MarkerTable:
    """
    Ordered marker rules.

    Rules are evaluated in order and the first rule whose markers match
    the raw label wins. Markers must be lowercase.

    Attributes:
        rules: Tuple of MarkerRule
    """

    rules: tuple[MarkerRule, ...]

    def __post_init__(self) -> None:
        for rule in self.rules:
            if rule.category is SentimentCategory.NEUTRAL:
                raise ValueError("NEUTRAL is the fallthrough category and takes no markers")
            for marker in rule.markers | rule.exact:
                if marker != marker.lower():
                    raise ValueError(f"Marker must be lowercase: {marker!r}")

    def matching_categories(self, raw_label: str) -> list[SentimentCategory]:
        """Categories whose markers match raw_label, in rule order."""
        label = raw_label.strip().lower()
        return [rule.category for rule in self.rules if rule.matches(label)]

    def extend(self, category: SentimentCategory, *markers: str, exact: bool = False) -> "MarkerTable":
        """Return a copy with extra markers added to an existing category rule.

        With exact=True the markers only match a label equal to them.
        """
        if category not in {rule.category for rule in self.rules}:
            raise KeyError(f"No rule for category {category.value}")
        added = frozenset(m.lower() for m in markers)
        rules = []
        for rule in self.rules:
            if rule.category is category:
                rule = MarkerRule(
                    category=rule.category,
                    markers=rule.markers if exact else rule.markers | added,
                    exact=rule.exact | added if exact else rule.exact,
                )
            rules.append(rule)
        return MarkerTable(rules=tuple(rules))


POSITIVE_MARKERS = frozenset({
    # Polarity
    "positive",
    # Star ratings
    "4 star",
    "5 star",
    # Emotions
    "joy",
    "love",
    "optimism",
})

NEGATIVE_MARKERS = frozenset({
    # Polarity
    "negative",
    # Star ratings
    "1 star",
    "2 star",
    # Emotions
    "sadness",
    "anger",
    "fear",
    "disgust",
})

# Class-index labels of binary heads
POSITIVE_EXACT = frozenset({"label_1"})
NEGATIVE_EXACT = frozenset({"label_0"})

DEFAULT_MARKER_TABLE = MarkerTable(
    rules=(
        MarkerRule(SentimentCategory.POSITIVE, POSITIVE_MARKERS, POSITIVE_EXACT),
        MarkerRule(SentimentCategory.NEGATIVE, NEGATIVE_MARKERS, NEGATIVE_EXACT),
    )
)
