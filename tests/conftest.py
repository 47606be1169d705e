"""Shared fixtures for pgrules tests."""

from pathlib import Path

import pytest

_DEFAULT_EXPLANATION = (
    "Queries filtering on unindexed columns force a sequential scan of the whole "
    "table, which gets slower as the table grows."
)

_DEFAULT_EXAMPLES: list[tuple[str, str]] = [
    ("Incorrect (sequential scan)", "select * from orders where customer_id = 123;"),
    (
        "Correct (index scan)",
        "create index orders_customer_id_idx on orders (customer_id);",
    ),
]


def _make_rule_doc(
    *,
    title: str | None = "Add Missing Index",
    impact: str | None = "CRITICAL",
    impact_description: str | None = "100x faster lookups",
    explanation: str = _DEFAULT_EXPLANATION,
    examples: list[tuple[str, str]] | None = None,
    language: str | None = "sql",
    extra: str = "",
) -> str:
    """Build a rule document: front matter, heading, prose, labeled examples."""
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    if impact is not None:
        lines.append(f"impact: {impact}")
    if impact_description is not None:
        lines.append(f"impactDescription: {impact_description}")
    lines.append("---")
    lines.append("")
    if title:
        lines.append(f"## {title}")
        lines.append("")
    lines.append(explanation)
    lines.append("")
    for label, code in _DEFAULT_EXAMPLES if examples is None else examples:
        lines.append(f"**{label}:**")
        lines.append("")
        lines.append("```" + (language or ""))
        lines.append(code)
        lines.append("```")
        lines.append("")
    if extra:
        lines.append(extra)
    return "\n".join(lines)


def _write_rule(rules_dir: Path, filename: str, **kwargs: object) -> Path:
    """Write a rule document into rules_dir."""
    rules_dir.mkdir(parents=True, exist_ok=True)
    path = rules_dir / filename
    path.write_text(_make_rule_doc(**kwargs), encoding="utf-8")  # type: ignore[arg-type]
    return path


@pytest.fixture
def rules_dir(tmp_path: Path) -> Path:
    """Empty rules directory."""
    path = tmp_path / "rules"
    path.mkdir()
    return path


@pytest.fixture
def populated_rules_dir(rules_dir: Path) -> Path:
    """Rules directory with valid, warning-only, and invalid files plus a template."""
    _write_rule(rules_dir, "query-missing-indexes.md", title="Add Missing Index")
    _write_rule(
        rules_dir,
        "query-select-star.md",
        title="Avoid SELECT Star",
        impact="HIGH",
        examples=[("Correct (explicit columns)", "select id, name from users;")],
    )
    _write_rule(rules_dir, "schema-zebra.md", title="Zebra Index", impact="HIGH")
    _write_rule(rules_dir, "schema-bloat.md", title="Avoid Bloat", impact="HIGH")
    _write_rule(rules_dir, "lock-severe.md", title="Short Transactions", impact="SEVERE")
    (rules_dir / "_template.md").write_text("---\ntitle: Template\n---\n", encoding="utf-8")
    return rules_dir
