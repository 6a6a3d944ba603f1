# Analysis engine: run the ordered rule set over one syntax tree and collect a Report.

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from sharplint.config import Config, get_enabled_rules
from sharplint.findings.models import Finding, Report
from sharplint.parser import parse
from sharplint.rules.base import Rule
from sharplint.syntax import SyntaxTree

logger = logging.getLogger(__name__)


class Engine:
    """
    Owns the ordered list of active rules.

    analyze() runs every rule against the same tree, in list order, and
    concatenates their findings. The tree is never modified, so analyzing
    the same tree twice gives equal reports.
    """

    def __init__(self, rules: Optional[Sequence[Rule]] = None) -> None:
        if rules is None:
            rules = get_enabled_rules()
        self._rules: List[Rule] = list(rules)

    @classmethod
    def from_config(cls, config: Config) -> "Engine":
        return cls(get_enabled_rules(config))

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def register(self, rule: Rule) -> None:
        """Append a rule; its findings are reported after those of existing rules."""
        if any(existing.id == rule.id for existing in self._rules):
            raise ValueError(f"Rule {rule.id!r} is already registered")
        self._rules.append(rule)

    def analyze(self, tree: SyntaxTree) -> Report:
        findings: List[Finding] = []
        for rule in self._rules:
            rule_findings = rule.detect(tree)
            logger.debug("Rule %s: %d finding(s)", rule.id, len(rule_findings))
            findings.extend(rule_findings)
        logger.info("Analysis complete: %d finding(s) from %d rule(s)", len(findings), len(self._rules))
        return Report(findings=tuple(findings))

    def analyze_source(self, text: str) -> Report:
        """
        Parse C# text and analyze it.

        Raises:
            ParseError: If the text is not valid C#; no rule runs in that case.
        """
        return self.analyze(parse(text))
