"""Parse rule documents (front matter + markdown body) into Rule records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePath

from pgrules.rules.models import Example, ParseResult, Rule

# File name prefix (text before the first "-") to section number
SECTION_PREFIXES: dict[str, int] = {
    "query": 1,
    "conn": 2,
    "connection": 2,
    "schema": 3,
    "lock": 4,
    "security": 5,
    "data": 6,
    "monitor": 7,
    "advanced": 8,
}

_HEADING_RE = re.compile(r"^##\s+(?P<title>.+?)\s*$")
_RENDERED_HEADING_RE = re.compile(r"^###\s+(?P<id>(?P<section>\d+)\.\d+)\s+(?P<title>.+?)\s*$")
_RENDERED_IMPACT_RE = re.compile(
    r"^\*\*Impact:\s*(?P<impact>[^\s(*]+)(?:\s+\((?P<description>.*)\))?\*\*\s*$"
)
_LABEL_RE = re.compile(r"^\*\*(?P<label>.+?):\*\*\s*$")
_LABEL_DESCRIPTION_RE = re.compile(r"^(?P<label>[^(]+?)\s*\((?P<description>.+)\)$")
_FENCE_RE = re.compile(r"^```(?P<info>.*)$")
_NOTE_RE = re.compile(r"^\*\*Supabase Note:\*\*\s*(?P<text>.*)$", re.IGNORECASE)
_REFERENCE_RE = re.compile(r"^\*{0,2}References?:\*{0,2}\s*(?P<inline>.*)$", re.IGNORECASE)
_LIST_ITEM_RE = re.compile(r"^[-*]\s+(?P<item>.+)$")


def section_for_filename(filename: str) -> tuple[int | None, str | None]:
    """Map a rule file name to its section number.

    Returns (section, None) on success and (None, error) for an unknown prefix.
    """
    stem = PurePath(filename).stem
    prefix = stem.split("-", 1)[0]
    section = SECTION_PREFIXES.get(prefix)
    if section is None:
        accepted = ", ".join(SECTION_PREFIXES)
        return None, (
            f"Unrecognized section prefix '{prefix}' in {PurePath(filename).name}. "
            f"File names must start with one of: {accepted}"
        )
    return section, None


def parse_rule(text: str, filename: str) -> ParseResult:
    """Parse one rule document.

    Never raises. Parsing is best-effort: every structural problem found in
    a single pass is reported, and ``rule`` is only set when there are none.
    """
    errors: list[str] = []

    frontmatter, body_lines, fm_error = _split_frontmatter(text)
    if fm_error:
        errors.append(fm_error)

    heading, body_lines = _take_heading(body_lines)
    body = _parse_body(body_lines)

    title = frontmatter.get("title") or heading or ""
    if not title:
        errors.append("Missing title (set 'title' in the frontmatter)")

    section, section_error = section_for_filename(filename)
    if section_error:
        errors.append(section_error)

    if errors or section is None:
        return ParseResult(success=False, errors=errors, warnings=body.warnings)

    rule = Rule(
        title=title,
        impact=frontmatter.get("impact", ""),
        impact_description=frontmatter.get("impactDescription") or None,
        explanation=body.explanation,
        section=section,
        examples=body.examples,
        supabase_notes=body.supabase_notes,
        references=body.references,
        source=PurePath(filename).name,
    )
    return ParseResult(success=True, rule=rule, warnings=body.warnings)


def parse_rendered_rule(text: str) -> ParseResult:
    """Parse one rule subsection of a rendered guide back into a Rule.

    Expects the ``### <id> <title>`` heading followed by the
    ``**Impact: LEVEL (description)**`` line and the usual body.
    """
    lines = text.splitlines()
    start = _first_content_line(lines)
    match = _RENDERED_HEADING_RE.match(lines[start].strip()) if start < len(lines) else None
    if match is None:
        return ParseResult(
            success=False,
            errors=["Missing rule heading (expected '### <id> <title>')"],
        )

    rest = lines[start + 1 :]
    impact = ""
    impact_description: str | None = None
    errors: list[str] = []
    idx = _first_content_line(rest)
    impact_match = _RENDERED_IMPACT_RE.match(rest[idx].strip()) if idx < len(rest) else None
    if impact_match is None:
        errors.append("Missing impact line (expected '**Impact: LEVEL**')")
    else:
        impact = impact_match.group("impact")
        impact_description = impact_match.group("description") or None
        rest = rest[idx + 1 :]

    body = _parse_body(rest)
    if errors:
        return ParseResult(success=False, errors=errors, warnings=body.warnings)

    rule = Rule(
        title=match.group("title"),
        impact=impact,
        impact_description=impact_description,
        explanation=body.explanation,
        section=int(match.group("section")),
        examples=body.examples,
        supabase_notes=body.supabase_notes,
        references=body.references,
        id=match.group("id"),
    )
    return ParseResult(success=True, rule=rule, warnings=body.warnings)


def _split_frontmatter(text: str) -> tuple[dict[str, str], list[str], str | None]:
    """Split ``---`` delimited key: value front matter from the body."""
    lines = text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, lines, "Missing or malformed frontmatter (expected a block delimited by '---')"

    frontmatter: dict[str, str] = {}
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            return frontmatter, lines[i + 1 :], None
        if ":" in line:
            key, _, value = line.partition(":")
            frontmatter[key.strip()] = _unquote(value.strip())

    return {}, lines[1:], "Missing or malformed frontmatter (no closing '---')"


def _unquote(value: str) -> str:
    """Remove one matching pair of surrounding quotes, if present."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _take_heading(lines: list[str]) -> tuple[str | None, list[str]]:
    """Drop a leading ``## Title`` heading, returning its text."""
    idx = _first_content_line(lines)
    if idx < len(lines):
        match = _HEADING_RE.match(lines[idx].strip())
        if match:
            return match.group("title"), lines[idx + 1 :]
    return None, lines


def _first_content_line(lines: list[str]) -> int:
    for i, line in enumerate(lines):
        if line.strip():
            return i
    return len(lines)


@dataclass
class _Body:
    explanation: str = ""
    examples: list[Example] = field(default_factory=list)
    supabase_notes: str | None = None
    references: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class _BodyParser:
    """Line-oriented state machine over the markdown body.

    Modes: "explanation" (before the first label), "example" (after a label),
    "notes" (after a Supabase Note marker) and "references".
    """

    def __init__(self) -> None:
        self.body = _Body()
        self.mode = "explanation"
        self.explanation: list[str] = []
        self.notes: list[str] | None = None
        self.current: Example | None = None
        self.current_has_code = False
        self.trailing: list[str] = []
        self.pending_rules: list[str] = []
        self.fence: list[str] | None = None
        self.fence_opening = ""
        self.fence_is_code = False

    def feed(self, line: str) -> None:
        stripped = line.strip()

        if self.fence is not None:
            if stripped == "```":
                self._close_fence(line)
            else:
                self.fence.append(line)
            return

        # A "---" is held until the next non-blank line: kept as a horizontal
        # rule before more text, dropped as a separator before a new block.
        if stripped == "---" and self.mode != "references":
            self.pending_rules.append(line)
            return
        if self.pending_rules and not stripped:
            self.pending_rules.append(line)
            return

        fence_match = _FENCE_RE.match(stripped)
        if fence_match:
            self._open_fence(line, fence_match.group("info"))
            self._settle_rules(keep=not self.fence_is_code)
            return

        note_match = _NOTE_RE.match(stripped)
        if note_match:
            self._settle_rules(keep=False)
            self._finish_example()
            self.mode = "notes"
            self.notes = [note_match.group("text")]
            return

        reference_match = _REFERENCE_RE.match(stripped)
        if reference_match:
            self._settle_rules(keep=False)
            self._finish_example()
            self.mode = "references"
            inline = reference_match.group("inline").strip()
            if inline:
                self.body.references.append(inline)
            return

        label_match = _LABEL_RE.match(stripped)
        if label_match:
            self._settle_rules(keep=False)
            self._finish_example()
            self._start_example(label_match.group("label").strip())
            return

        if self.mode == "references":
            if stripped and stripped != "---":
                item = _LIST_ITEM_RE.match(stripped)
                self.body.references.append(item.group("item").strip() if item else stripped)
            return

        self._settle_rules(keep=True)
        self._bucket().append(line)

    def finish(self) -> _Body:
        self._settle_rules(keep=False)
        if self.fence is not None:
            label = self.current.label if self.current is not None else "explanation"
            self.body.warnings.append(
                f"Unterminated code block in '{label}' (closing ``` not found)"
            )
            self._close_fence("```")
        self._finish_example()
        self.body.explanation = "\n".join(self.explanation).strip()
        if self.notes is not None:
            self.body.supabase_notes = "\n".join(self.notes).strip() or None
        return self.body

    def _settle_rules(self, keep: bool) -> None:
        if keep:
            self._bucket().extend(self.pending_rules)
        self.pending_rules = []

    def _bucket(self) -> list[str]:
        if self.mode == "example":
            return self.trailing
        if self.mode == "notes" and self.notes is not None:
            return self.notes
        return self.explanation

    def _start_example(self, full_label: str) -> None:
        label, description = full_label, None
        match = _LABEL_DESCRIPTION_RE.match(full_label)
        if match:
            label = match.group("label").strip()
            description = match.group("description").strip()
        self.current = Example(label=label, description=description)
        self.current_has_code = False
        self.trailing = []
        self.mode = "example"

    def _finish_example(self) -> None:
        if self.current is None:
            return
        text = "\n".join(self.trailing).strip()
        self.current.additional_text = text or None
        self.body.examples.append(self.current)
        self.current = None
        self.trailing = []

    def _open_fence(self, line: str, info: str) -> None:
        self.fence = []
        self.fence_opening = line
        self.fence_is_code = (
            self.mode == "example" and self.current is not None and not self.current_has_code
        )
        if self.fence_is_code and self.current is not None:
            language = info.strip().split(" ", 1)[0]
            self.current.language = language or None
            self.current_has_code = True

    def _close_fence(self, closing: str) -> None:
        lines = self.fence or []
        if self.fence_is_code and self.current is not None:
            self.current.code = "\n".join(lines)
        elif self.mode != "references":
            self._bucket().extend([self.fence_opening, *lines, closing])
        self.fence = None
        self.fence_is_code = False


def _parse_body(lines: list[str]) -> _Body:
    parser = _BodyParser()
    for line in lines:
        parser.feed(line)
    return parser.finish()
