"""Rule documents: models, classification, parsing, and validation."""

from pgrules.rules.classify import classify_example
from pgrules.rules.models import (
    IMPACT_LEVELS,
    Example,
    ExampleKind,
    ImpactLevel,
    ParseResult,
    Rule,
    ValidationResult,
)
from pgrules.rules.parser import SECTION_PREFIXES, parse_rendered_rule, parse_rule
from pgrules.rules.validator import validate_rule

__all__ = [
    "IMPACT_LEVELS",
    "SECTION_PREFIXES",
    "Example",
    "ExampleKind",
    "ImpactLevel",
    "ParseResult",
    "Rule",
    "ValidationResult",
    "classify_example",
    "parse_rendered_rule",
    "parse_rule",
    "validate_rule",
]
