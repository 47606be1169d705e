"""Guide assembly: sections, metadata, aggregation, and test-case extraction."""

from pgrules.guide.builder import assign_rule_ids, render_guide, render_rule, to_anchor
from pgrules.guide.extractor import extract_test_cases, summarize_test_cases
from pgrules.guide.metadata import load_metadata
from pgrules.guide.models import (
    ExcludedRule,
    IncludedRule,
    Metadata,
    RuleSet,
    Section,
    TestCase,
)
from pgrules.guide.pipeline import discover_rule_files, evaluate_rule_file, load_rule_set
from pgrules.guide.sections import DEFAULT_SECTIONS, load_sections
from pgrules.guide.writer import write_guide, write_test_cases

__all__ = [
    "DEFAULT_SECTIONS",
    "ExcludedRule",
    "IncludedRule",
    "Metadata",
    "RuleSet",
    "Section",
    "TestCase",
    "assign_rule_ids",
    "discover_rule_files",
    "evaluate_rule_file",
    "extract_test_cases",
    "load_metadata",
    "load_rule_set",
    "load_sections",
    "render_guide",
    "render_rule",
    "summarize_test_cases",
    "to_anchor",
    "write_guide",
    "write_test_cases",
]
