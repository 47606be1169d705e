"""Tests for guide/extractor.py — flattening examples into test cases."""

from __future__ import annotations

from pgrules.guide.builder import assign_rule_ids, render_guide
from pgrules.guide.extractor import extract_test_cases, summarize_test_cases
from pgrules.guide.models import Metadata, Section, TestCase
from pgrules.guide.sections import default_sections
from pgrules.rules.models import Example, Rule


def _rule(title: str, section: int = 1, examples: list[Example] | None = None) -> Rule:
    return Rule(
        title=title,
        impact="HIGH",
        explanation="Explanation long enough to not matter for extraction.",
        section=section,
        examples=examples
        if examples is not None
        else [
            Example(label="Incorrect", code="select * from a;", language="sql"),
            Example(label="Correct", code="select id from a;", language="sql"),
        ],
    )


class TestExtractTestCases:
    def test_bad_and_good_from_labels(self):
        rule = _rule(
            "Batch Lookups",
            section=6,
            examples=[
                Example(label="Incorrect", description="N+1 query", code="SELECT * FROM a;"),
                Example(
                    label="Correct",
                    description="batched",
                    code="SELECT * FROM a WHERE id = ANY($1);",
                ),
            ],
        )
        cases = extract_test_cases([rule])
        assert len(cases) == 2
        assert [c.type for c in cases] == ["bad", "good"]
        assert all(c.rule_id == "6.1" == rule.id for c in cases)
        assert cases[0].code == "SELECT * FROM a;"
        assert cases[0].description == "N+1 query"
        assert cases[1].description == "batched"

    def test_ids_match_guide(self):
        rules = [_rule("Zebra Index", section=3), _rule("Avoid Bloat", section=3)]
        cases = extract_test_cases(rules)
        guide = render_guide(rules, default_sections(), Metadata(date="January 2026"))
        assert [c.rule_id for c in cases] == ["3.1", "3.1", "3.2", "3.2"]
        assert [c.rule_title for c in cases][::2] == ["Avoid Bloat", "Zebra Index"]
        assert "### 3.1 Avoid Bloat" in guide

    def test_unregistered_section_yields_no_cases(self):
        sections = [Section(number=1, title="Q", prefix="query", impact="CRITICAL", description="d")]
        rules = [_rule("In Registry", section=1), _rule("Short Transactions", section=4)]
        cases = extract_test_cases(rules, sections)
        guide = render_guide(rules, sections, Metadata(date="January 2026"))
        assert {c.rule_id for c in cases} == {"1.1"}
        assert all(f"### {c.rule_id} " in guide for c in cases)

    def test_default_registry_when_sections_omitted(self):
        cases = extract_test_cases([_rule("Late", section=8)])
        assert len(cases) == 2

    def test_empty_registry_yields_no_cases(self):
        assert extract_test_cases([_rule("A")], []) == []

    def test_section_order(self):
        rules = [_rule("Late", section=8), _rule("Early", section=2)]
        cases = extract_test_cases(rules)
        assert [c.rule_id for c in cases] == ["2.1", "2.1", "8.1", "8.1"]

    def test_skips_empty_code(self):
        rule = _rule(
            "R",
            examples=[
                Example(label="Incorrect", code="  \n"),
                Example(label="Correct", code="select 1;"),
            ],
        )
        cases = extract_test_cases([rule])
        assert [c.type for c in cases] == ["good"]

    def test_skips_unclassified(self):
        rule = _rule(
            "R",
            examples=[
                Example(label="Alternative", code="select 2;"),
                Example(label="Correct", code="select 1;"),
            ],
        )
        assert len(extract_test_cases([rule])) == 1

    def test_bad_precedence(self):
        rule = _rule("R", examples=[Example(label="Incorrect Example", code="select 1;")])
        assert extract_test_cases([rule])[0].type == "bad"

    def test_defaults(self):
        rule = _rule("Use Indexes", examples=[Example(label="Correct usage", code="select 1;")])
        case = extract_test_cases([rule])[0]
        assert case.language == "sql"
        assert case.description == "Correct usage example for Use Indexes"

    def test_language_kept(self):
        rule = _rule("R", examples=[Example(label="Good", code="x", language="plpgsql")])
        assert extract_test_cases([rule])[0].language == "plpgsql"

    def test_empty_input(self):
        assert extract_test_cases([]) == []

    def test_ids_stable_when_already_assigned(self):
        rules = [_rule("B", section=1), _rule("A", section=1)]
        assign_rule_ids(rules)
        first = [c.rule_id for c in extract_test_cases(rules)]
        assert [c.rule_id for c in extract_test_cases(rules)] == first


class TestTestCaseSerialization:
    def test_camel_case_keys(self):
        case = TestCase(
            rule_id="1.1",
            rule_title="T",
            type="bad",
            code="select 1;",
            language="sql",
            description="d",
        )
        assert case.model_dump(by_alias=True) == {
            "ruleId": "1.1",
            "ruleTitle": "T",
            "type": "bad",
            "code": "select 1;",
            "language": "sql",
            "description": "d",
        }

    def test_accepts_aliases(self):
        case = TestCase.model_validate(
            {
                "ruleId": "2.1",
                "ruleTitle": "T",
                "type": "good",
                "code": "x",
                "description": "d",
            }
        )
        assert case.rule_id == "2.1"
        assert case.language == "sql"


class TestSummarize:
    def test_counts(self):
        cases = extract_test_cases([_rule("A"), _rule("B")])
        assert summarize_test_cases(cases) == {"bad": 2, "good": 2}

    def test_empty(self):
        assert summarize_test_cases([]) == {"bad": 0, "good": 0}
