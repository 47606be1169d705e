"""Bad/good classification of example labels."""

from __future__ import annotations

from pgrules.rules.models import ExampleKind

BAD_KEYWORDS: tuple[str, ...] = ("incorrect", "wrong", "bad")
GOOD_KEYWORDS: tuple[str, ...] = (
    "correct",
    "good",
    "usage",
    "implementation",
    "example",
    "recommended",
)


def classify_example(label: str) -> ExampleKind:
    """Classify an example label by case-insensitive keyword match.

    Bad keywords are checked first: "Incorrect Example" is BAD even though
    "example" is a good keyword, and "incorrect" contains "correct".
    """
    lower = label.lower()
    if any(kw in lower for kw in BAD_KEYWORDS):
        return ExampleKind.BAD
    if any(kw in lower for kw in GOOD_KEYWORDS):
        return ExampleKind.GOOD
    return ExampleKind.UNCLASSIFIED
