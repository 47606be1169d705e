"""Discover rule files and sort them into included and excluded outcomes."""

from __future__ import annotations

import logging
from pathlib import Path

from pgrules.errors import RulesDirectoryError
from pgrules.guide.models import ExcludedRule, FileOutcome, IncludedRule, RuleSet
from pgrules.rules.parser import parse_rule
from pgrules.rules.validator import validate_rule

logger = logging.getLogger(__name__)

# Files starting with this marker are templates or policy docs, not rules
RESERVED_PREFIX = "_"


def discover_rule_files(rules_dir: Path) -> list[Path]:
    """List rule documents in rules_dir, sorted by name.

    A missing directory is the initial-setup state and yields no files.
    """
    if not rules_dir.exists():
        return []
    if not rules_dir.is_dir():
        raise RulesDirectoryError(f"Rules path is not a directory: {rules_dir}")
    return sorted(
        path
        for path in rules_dir.glob("*.md")
        if path.is_file() and not path.name.startswith(RESERVED_PREFIX)
    )


def evaluate_rule_file(filename: str, text: str) -> FileOutcome:
    """Parse then validate one document; any error excludes the whole file."""
    parsed = parse_rule(text, filename)
    if not parsed.success or parsed.rule is None:
        return ExcludedRule(
            filename=filename,
            stage="parse",
            errors=parsed.errors,
            warnings=parsed.warnings,
        )

    validation = validate_rule(parsed.rule)
    warnings = [*parsed.warnings, *validation.warnings]
    if not validation.valid:
        return ExcludedRule(
            filename=filename,
            stage="validate",
            errors=validation.errors,
            warnings=warnings,
        )
    return IncludedRule(filename=filename, rule=parsed.rule, warnings=warnings)


def load_rule_set(rules_dir: Path) -> RuleSet:
    """Evaluate every rule file; one bad file never stops the others."""
    rule_set = RuleSet()
    for path in discover_rule_files(rules_dir):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path.name, exc)
            rule_set.excluded.append(
                ExcludedRule(filename=path.name, stage="read", errors=[f"Could not read file: {exc}"])
            )
            continue

        outcome = evaluate_rule_file(path.name, text)
        if isinstance(outcome, IncludedRule):
            rule_set.included.append(outcome)
        else:
            logger.warning("Skipping invalid file %s (%d errors)", path.name, len(outcome.errors))
            for error in outcome.errors:
                logger.debug("  %s: %s", path.name, error)
            rule_set.excluded.append(outcome)
    return rule_set
