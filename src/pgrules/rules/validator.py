"""Content-quality checks for parsed rules."""

from __future__ import annotations

from pgrules.rules.classify import classify_example
from pgrules.rules.models import IMPACT_LEVELS, ExampleKind, Rule, ValidationResult

MIN_EXPLANATION_LENGTH = 50


def validate_rule(rule: Rule) -> ValidationResult:
    """Check a parsed rule against the content policy.

    Every check runs, so all problems are reported in one pass. Warnings
    never affect ``valid``.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not rule.title.strip():
        errors.append("Missing or empty title")

    explanation = rule.explanation.strip()
    if not explanation:
        errors.append("Missing or empty explanation")
    elif len(explanation) < MIN_EXPLANATION_LENGTH:
        warnings.append(f"Explanation is shorter than {MIN_EXPLANATION_LENGTH} characters")

    if not rule.examples:
        errors.append("Missing examples (need at least one bad and one good example)")
    else:
        _check_examples(rule, errors, warnings)

    if rule.impact not in IMPACT_LEVELS:
        errors.append(
            f"Invalid impact level: {rule.impact}. Must be one of: {', '.join(IMPACT_LEVELS)}"
        )

    if not rule.impact_description:
        warnings.append("Missing impactDescription (recommended for quantifying benefit)")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def _check_examples(rule: Rule, errors: list[str], warnings: list[str]) -> None:
    kinds = {classify_example(example.label) for example in rule.examples}
    has_bad = ExampleKind.BAD in kinds
    has_good = ExampleKind.GOOD in kinds

    if not has_bad and not has_good:
        errors.append("Missing bad/incorrect and good/correct examples")
    elif not has_bad:
        warnings.append("Missing bad example (recommended for clarity)")
    elif not has_good:
        errors.append("Missing good/correct example")

    if not any(example.code.strip() for example in rule.examples):
        errors.append("Examples have no code")

    for example in rule.examples:
        if example.code and not example.language:
            warnings.append(f'Example "{example.label}" missing language specification')
