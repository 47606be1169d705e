"""Extract labeled good/bad code samples from valid rules."""

from __future__ import annotations

from collections.abc import Iterable

from pgrules.guide.builder import DEFAULT_LANGUAGE, assign_rule_ids
from pgrules.guide.models import Section, TestCase
from pgrules.guide.sections import default_sections
from pgrules.rules.classify import classify_example
from pgrules.rules.models import ExampleKind, Rule


def extract_test_cases(
    rules: Iterable[Rule], sections: list[Section] | None = None
) -> list[TestCase]:
    """Flatten rule examples into test cases.

    Ids come from the same assignment the guide uses, and rules in sections
    missing from ``sections`` (default registry when None) are left out, as
    the guide leaves them out. Examples with blank code or an unclassified
    label are skipped.
    """
    if sections is None:
        sections = default_sections()
    registered = {section.number for section in sections}
    cases: list[TestCase] = []
    for number, section_rules in assign_rule_ids(rules).items():
        if number not in registered:
            continue
        for rule in section_rules:
            for example in rule.examples:
                if not example.code.strip():
                    continue
                kind = classify_example(example.label)
                if kind is ExampleKind.UNCLASSIFIED:
                    continue
                cases.append(
                    TestCase(
                        rule_id=rule.id or "",
                        rule_title=rule.title,
                        type=kind.value,
                        code=example.code,
                        language=example.language or DEFAULT_LANGUAGE,
                        description=(
                            example.description or f"{example.label} example for {rule.title}"
                        ),
                    )
                )
    return cases


def summarize_test_cases(cases: list[TestCase]) -> dict[str, int]:
    """Counts by type, e.g. {"bad": 3, "good": 4}."""
    return {
        "bad": sum(1 for case in cases if case.type == "bad"),
        "good": sum(1 for case in cases if case.type == "good"),
    }
