"""Aggregate valid rules by section, assign ids, and render the guide document."""

from __future__ import annotations

import re
from collections.abc import Iterable

from pgrules.guide.models import Metadata, Section
from pgrules.rules.models import Rule

AGENT_NOTE = (
    "> This document is optimized for AI agents and LLMs. "
    "Rules are prioritized by performance impact."
)
EMPTY_SECTION_NOTICE = "*No rules defined yet. See rules/_template.md for creating new rules.*"
DEFAULT_LANGUAGE = "sql"

_ANCHOR_STRIP_RE = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RE = re.compile(r"\s+")


def to_anchor(text: str) -> str:
    """Heading anchor: lower-case, strip punctuation, whitespace runs to "-"."""
    return _WHITESPACE_RE.sub("-", _ANCHOR_STRIP_RE.sub("", text.lower()))


def _title_key(rule: Rule) -> str:
    return rule.title.casefold()


def assign_rule_ids(rules: Iterable[Rule]) -> dict[int, list[Rule]]:
    """Group rules by section and set ``id`` to "<section>.<n>".

    Rules are ordered by title within a section (stable for equal titles),
    so ids depend only on section membership and titles, never on input
    order. Returns the groups keyed by ascending section number.
    """
    by_section: dict[int, list[Rule]] = {}
    for rule in rules:
        by_section.setdefault(rule.section, []).append(rule)

    for number, section_rules in by_section.items():
        section_rules.sort(key=_title_key)
        for index, rule in enumerate(section_rules, start=1):
            rule.id = f"{number}.{index}"

    return dict(sorted(by_section.items()))


def render_rule(rule: Rule) -> list[str]:
    """Render one rule subsection, ending with its "---" separator."""
    out: list[str] = [f"### {rule.id} {rule.title}\n"]

    if rule.impact_description:
        out.append(f"**Impact: {rule.impact} ({rule.impact_description})**\n")
    else:
        out.append(f"**Impact: {rule.impact}**\n")

    out.append(f"{rule.explanation}\n")

    for example in rule.examples:
        if example.description:
            out.append(f"**{example.label} ({example.description}):**\n")
        else:
            out.append(f"**{example.label}:**\n")
        out.append("```" + (example.language or DEFAULT_LANGUAGE))
        out.append(example.code)
        out.append("```\n")
        if example.additional_text:
            out.append(f"{example.additional_text}\n")

    if rule.supabase_notes:
        out.append(f"**Supabase Note:** {rule.supabase_notes}\n")

    if len(rule.references) == 1:
        out.append(f"Reference: {rule.references[0]}\n")
    elif rule.references:
        out.append("References:")
        out.extend(f"- {ref}" for ref in rule.references)
        out.append("")

    out.append("---\n")
    return out


def render_guide(rules: Iterable[Rule], sections: list[Section], metadata: Metadata) -> str:
    """Render the aggregated guide.

    Output is a pure function of the inputs: sections appear in number
    order, rules in id order, and the only date is ``metadata.date``.
    """
    by_section = assign_rule_ids(rules)
    ordered = sorted(sections, key=lambda s: s.number)

    out: list[str] = [
        f"# {metadata.title}\n",
        f"**Version {metadata.version}**",
        metadata.organization,
        f"{metadata.date}\n",
        f"{AGENT_NOTE}\n",
        "---\n",
        "## Abstract\n",
        f"{metadata.abstract}\n",
        "---\n",
        "## Table of Contents\n",
    ]

    for section in ordered:
        out.append(
            f"{section.number}. [{section.title}](#{to_anchor(section.title)})"
            f" - **{section.impact}**"
        )
        for rule in by_section.get(section.number, []):
            anchor = to_anchor(f"{rule.id}-{rule.title}")
            out.append(f"   - {rule.id} [{rule.title}](#{anchor})")
        out.append("")

    out.append("---\n")

    for section in ordered:
        section_rules = by_section.get(section.number, [])
        out.append(f"## {section.number}. {section.title}\n")
        out.append(f"**Impact: {section.impact}**\n")
        out.append(f"{section.description}\n")
        if not section_rules:
            out.append(f"{EMPTY_SECTION_NOTICE}\n")
        for rule in section_rules:
            out.extend(render_rule(rule))

    if metadata.references:
        out.append("## References\n")
        out.extend(f"- {ref}" for ref in metadata.references)
        out.append("")

    return "\n".join(out)


def count_rendered_rules(rules: Iterable[Rule], sections: list[Section]) -> int:
    """Number of rules whose section is in the registry and so get rendered."""
    numbers = {section.number for section in sections}
    return sum(1 for rule in rules if rule.section in numbers)
