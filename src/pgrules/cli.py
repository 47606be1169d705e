"""CLI entry point for pgrules."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import cast

from pgrules import __version__
from pgrules.config import DEFAULT_CONFIG_FILE, BuildPaths, load_build_config
from pgrules.errors import PgRulesError
from pgrules.guide.builder import count_rendered_rules, render_guide
from pgrules.guide.extractor import extract_test_cases, summarize_test_cases
from pgrules.guide.metadata import load_metadata
from pgrules.guide.models import ExcludedRule, RuleSet
from pgrules.guide.pipeline import load_rule_set
from pgrules.guide.sections import load_sections
from pgrules.guide.writer import write_guide, write_test_cases


def _resolve_paths(args: argparse.Namespace) -> BuildPaths:
    root = Path.cwd()
    config_path = cast(Path | None, args.config) or root / DEFAULT_CONFIG_FILE
    paths = load_build_config(config_path).resolve(root)

    rules_dir = cast(Path | None, getattr(args, "rules_dir", None))
    if rules_dir is not None:
        paths.sections_file = rules_dir / paths.sections_file.name
        paths.rules_dir = rules_dir
    metadata = cast(Path | None, getattr(args, "metadata", None))
    if metadata is not None:
        paths.metadata_file = metadata
    return paths


def _print_skipped(rule_set: RuleSet) -> None:
    for excluded in rule_set.excluded:
        print(f"Skipping invalid file {excluded.filename}:", file=sys.stderr)
        for error in excluded.errors:
            print(f"  - {error}", file=sys.stderr)


def _cmd_validate(args: argparse.Namespace) -> None:
    paths = _resolve_paths(args)
    print("Validating Postgres best practices rules...\n")

    rule_set = load_rule_set(paths.rules_dir)
    if rule_set.total_files == 0:
        print("No rule files found (this is expected for initial setup).")
        print(f"Create rule files in: {paths.rules_dir}/")
        print("Use the _template.md as a starting point.")
        return

    for outcome in rule_set.outcomes():
        errors = outcome.errors if isinstance(outcome, ExcludedRule) else []
        if not errors and not outcome.warnings:
            continue
        print(f"\n{outcome.filename}:")
        for error in errors:
            print(f"  ERROR: {error}")
        for warning in outcome.warnings:
            print(f"  WARNING: {warning}")

    print(f"\n{'=' * 50}")
    print(
        f"Total: {rule_set.total_files} files | Valid: {len(rule_set.included)}"
        f" | Invalid: {len(rule_set.excluded)}"
    )

    if rule_set.has_errors:
        print("\nValidation failed. Please fix the errors above.")
        sys.exit(1)
    print("\nValidation passed!")


def _cmd_build(args: argparse.Namespace) -> None:
    paths = _resolve_paths(args)
    output = cast(Path | None, getattr(args, "output", None)) or paths.guide_output
    print("Building AGENTS.md...\n")

    metadata = load_metadata(paths.metadata_file)
    sections = load_sections(paths.sections_file)
    rule_set = load_rule_set(paths.rules_dir)

    if rule_set.total_files == 0:
        print("No rule files found. Generating empty guide template.")
    _print_skipped(rule_set)

    rules = rule_set.rules
    write_guide(output, render_guide(rules, sections, metadata))
    print(f"Generated: {output}")
    print(f"Total rules: {count_rendered_rules(rules, sections)}")


def _cmd_extract_tests(args: argparse.Namespace) -> None:
    paths = _resolve_paths(args)
    output = cast(Path | None, getattr(args, "output", None)) or paths.test_cases_output
    print("Extracting test cases from rules...\n")

    sections = load_sections(paths.sections_file)
    cases = extract_test_cases(load_rule_set(paths.rules_dir).rules, sections)
    write_test_cases(output, cases)

    if not cases:
        print("No test cases extracted (no valid rules found).")
        print("This is expected for initial setup.\n")
        print(f"Generated: {output} (empty)")
        return

    counts = summarize_test_cases(cases)
    print(f"Generated: {output}")
    print(f"Total test cases: {len(cases)}")
    print(f"  Bad examples: {counts['bad']}")
    print(f"  Good examples: {counts['good']}")


def _cmd_all(args: argparse.Namespace) -> None:
    _cmd_build(args)
    print()
    _cmd_extract_tests(args)


def _add_rules_dir(parser: argparse.ArgumentParser) -> None:
    _ = parser.add_argument(
        "--rules-dir",
        type=Path,
        default=None,
        dest="rules_dir",
        help="Directory of rule documents (default: from config, 'rules')",
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="pgrules",
        description="Compile Postgres best-practice rules into a guide and test cases",
    )
    _ = parser.add_argument(
        "-V", "--version", action="version", version=f"pgrules {__version__}"
    )
    _ = parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Config file (default: ./{DEFAULT_CONFIG_FILE})",
    )
    subparsers = parser.add_subparsers(dest="command")

    # validate subcommand
    validate_p = subparsers.add_parser("validate", help="Validate rule files")
    _add_rules_dir(validate_p)

    # build subcommand
    build_p = subparsers.add_parser("build", help="Build the aggregated guide")
    _add_rules_dir(build_p)
    _ = build_p.add_argument("--output", type=Path, default=None, help="Guide output path")
    _ = build_p.add_argument("--metadata", type=Path, default=None, help="metadata.json path")

    # extract-tests subcommand
    extract_p = subparsers.add_parser("extract-tests", help="Extract good/bad test cases")
    _add_rules_dir(extract_p)
    _ = extract_p.add_argument(
        "--output", type=Path, default=None, help="Test-case JSON output path"
    )

    # all subcommand
    all_p = subparsers.add_parser("all", help="Build the guide and extract test cases")
    _add_rules_dir(all_p)
    _ = all_p.add_argument("--metadata", type=Path, default=None, help="metadata.json path")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dispatch = {
        "validate": _cmd_validate,
        "build": _cmd_build,
        "extract-tests": _cmd_extract_tests,
        "all": _cmd_all,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        handler(args)
    except PgRulesError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
