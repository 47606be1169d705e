"""Section registry: parse _sections.md or fall back to the built-in table."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pgrules.guide.models import Section

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(
    r"##\s+(\d+)\.\s+([^\n(]+)\s*\((\w+)\)\s*\n"
    r"\*\*Impact:\*\*\s*(\w+(?:-\w+)?)\s*\n"
    r"\*\*Description:\*\*\s*([^\n]+)"
)

DEFAULT_SECTIONS: tuple[Section, ...] = (
    Section(
        number=1,
        title="Query Performance",
        prefix="query",
        impact="CRITICAL",
        description="Slow queries, missing indexes, inefficient plans",
    ),
    Section(
        number=2,
        title="Connection Management",
        prefix="conn",
        impact="CRITICAL",
        description="Pooling, limits, serverless strategies",
    ),
    Section(
        number=3,
        title="Schema Design",
        prefix="schema",
        impact="HIGH",
        description="Table design, indexes, partitioning, data types",
    ),
    Section(
        number=4,
        title="Concurrency & Locking",
        prefix="lock",
        impact="MEDIUM-HIGH",
        description="Transactions, isolation, deadlocks",
    ),
    Section(
        number=5,
        title="Security & RLS",
        prefix="security",
        impact="MEDIUM-HIGH",
        description="Row-Level Security, privileges, auth patterns",
    ),
    Section(
        number=6,
        title="Data Access Patterns",
        prefix="data",
        impact="MEDIUM",
        description="N+1 queries, batch operations, pagination",
    ),
    Section(
        number=7,
        title="Monitoring & Diagnostics",
        prefix="monitor",
        impact="LOW-MEDIUM",
        description="pg_stat_statements, EXPLAIN, metrics",
    ),
    Section(
        number=8,
        title="Advanced Features",
        prefix="advanced",
        impact="LOW",
        description="Full-text search, JSONB, extensions",
    ),
)


def parse_sections(text: str) -> list[Section]:
    """Extract every section block from _sections.md content, ordered by number."""
    sections = [
        Section(
            number=int(match.group(1)),
            title=match.group(2).strip(),
            prefix=match.group(3).strip(),
            impact=match.group(4).strip(),
            description=match.group(5).strip(),
        )
        for match in _SECTION_RE.finditer(text)
    ]
    return sorted(sections, key=lambda s: s.number)


def load_sections(path: Path | None = None) -> list[Section]:
    """Load section definitions, all-or-nothing.

    A missing or unreadable file, or one with no parseable section, yields
    the full default table.
    """
    if path is None or not path.exists():
        logger.warning("Section definitions not found at %s, using default sections", path)
        return default_sections()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s (%s), using default sections", path, exc)
        return default_sections()

    sections = parse_sections(text)
    if not sections:
        logger.warning("No sections parsed from %s, using default sections", path)
        return default_sections()
    return sections


def default_sections() -> list[Section]:
    return [section.model_copy() for section in DEFAULT_SECTIONS]
