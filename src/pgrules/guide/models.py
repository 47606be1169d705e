"""Pydantic models for guide sections, metadata, test cases, and file outcomes."""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from pgrules.rules.models import Rule


class Section(BaseModel):
    number: int
    title: str
    prefix: str
    impact: str
    description: str


class Metadata(BaseModel):
    title: str = "Postgres Best Practices"
    version: str = "0.1.0"
    organization: str = "Supabase"
    date: str = ""
    abstract: str = "Postgres performance optimization guide for developers."
    references: list[str] = Field(default_factory=list)


class TestCase(BaseModel):
    """One labeled code sample, serialized with camelCase keys."""

    __test__: ClassVar[bool] = False  # not a pytest class

    model_config = ConfigDict(populate_by_name=True)

    rule_id: str = Field(alias="ruleId")
    rule_title: str = Field(alias="ruleTitle")
    type: Literal["bad", "good"]
    code: str
    language: str = "sql"
    description: str


class IncludedRule(BaseModel):
    filename: str
    rule: Rule
    warnings: list[str] = Field(default_factory=list)


class ExcludedRule(BaseModel):
    filename: str
    stage: Literal["read", "parse", "validate"]
    errors: list[str]
    warnings: list[str] = Field(default_factory=list)


FileOutcome = IncludedRule | ExcludedRule


class RuleSet(BaseModel):
    """Per-file outcomes of a run, split into included and excluded files."""

    included: list[IncludedRule] = Field(default_factory=list)
    excluded: list[ExcludedRule] = Field(default_factory=list)

    @property
    def rules(self) -> list[Rule]:
        return [item.rule for item in self.included]

    @property
    def total_files(self) -> int:
        return len(self.included) + len(self.excluded)

    @property
    def has_errors(self) -> bool:
        return len(self.excluded) > 0

    def outcomes(self) -> list[FileOutcome]:
        """All outcomes ordered by file name."""
        items: list[FileOutcome] = [*self.included, *self.excluded]
        return sorted(items, key=lambda item: item.filename)
