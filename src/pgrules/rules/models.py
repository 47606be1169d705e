"""Pydantic models and enums for rule documents."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class ImpactLevel(StrEnum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM_HIGH = "MEDIUM-HIGH"
    MEDIUM = "MEDIUM"
    LOW_MEDIUM = "LOW-MEDIUM"
    LOW = "LOW"


# Priority order, highest first
IMPACT_LEVELS: list[str] = [level.value for level in ImpactLevel]


class ExampleKind(StrEnum):
    BAD = "bad"
    GOOD = "good"
    UNCLASSIFIED = "unclassified"


class Example(BaseModel):
    label: str
    description: str | None = None
    code: str = ""
    language: str | None = None
    additional_text: str | None = None


class Rule(BaseModel):
    title: str
    impact: str = ""  # raw value; checked against ImpactLevel by the validator
    impact_description: str | None = None
    explanation: str = ""
    section: int
    examples: list[Example] = Field(default_factory=list)
    supabase_notes: str | None = None
    references: list[str] = Field(default_factory=list)
    source: str = ""
    # Assigned during aggregation, "<section>.<index>"
    id: str | None = None


class ParseResult(BaseModel):
    success: bool
    rule: Rule | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
