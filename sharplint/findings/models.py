# Pydantic data models for analysis results: Location, Finding, Report.

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """Where in the source a finding was reported (line, column, matched text)."""

    line: int = Field(..., ge=1, description="1-based line number")
    column: int = Field(..., ge=1, description="1-based column number")
    snippet: str = Field(..., description="Verbatim source text of the matched node")

    model_config = ConfigDict(frozen=True)


class Finding(BaseModel):
    """A single match reported by a rule (e.g. a public field at line 12)."""

    rule_id: str
    label: str = Field(..., description='Problem label, e.g. "Public field"')
    location: Location

    model_config = ConfigDict(frozen=True)

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def snippet(self) -> str:
        return self.location.snippet


class Report(BaseModel):
    """
    Findings of one analysis run.

    Ordered by rule (in the order the engine ran them), then by position of
    the match within the rule's pre-order traversal. Findings of different
    rules are never merged, even when they point at the same node.
    """

    findings: Tuple[Finding, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def problem_found(self) -> bool:
        return bool(self.findings)

    def by_rule(self, rule_id: str) -> Tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.rule_id == rule_id)
