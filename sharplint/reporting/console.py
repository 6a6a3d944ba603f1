# Console output: render findings as diagnostic lines, with Rich hints when verbose.

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.text import Text

from sharplint.findings.models import Finding, Report

NO_FINDINGS_MESSAGE = "No bad practice found"

# Remediation hints per rule (shown with --verbose)
RULE_REMEDIATIONS: dict[str, str] = {
    "public-field": "Expose the value through a property instead of a public field.",
    "public-non-readonly-field": (
        "Mark the field readonly, or replace it with a property with a private setter."
    ),
    "var-primitive-type": "Spell out the primitive type instead of var (e.g. int count = 0;).",
    "long-parameter-list": (
        "Group related parameters into a parameter object or split the method."
    ),
    "collapsible-nested-if": "Merge the conditions: if (a && b) { ... }.",
}


def format_finding(finding: Finding) -> str:
    """`<label> found on line <line>: <snippet>`"""
    return f"{finding.label} found on line {finding.location.line}: {finding.location.snippet}"


def render_report(report: Report) -> List[str]:
    """
    Render a report as plain diagnostic lines.

    One line per finding, in report order; or exactly [NO_FINDINGS_MESSAGE]
    when the report is empty.
    """
    if not report.problem_found:
        return [NO_FINDINGS_MESSAGE]
    return [format_finding(f) for f in report.findings]


def print_report(
    report: Report,
    console: Optional[Console] = None,
    verbose: bool = False,
) -> None:
    """
    Print a report to the console's output stream.

    Diagnostic lines are written to console.file exactly as render_report()
    returns them, bypassing Rich rendering so snippets keep their tabs and
    carriage returns. If verbose, Rich then prints one remediation hint per
    rule that fired and a summary with the finding count.
    """
    if console is None:
        console = Console(highlight=False)

    out = console.file
    for line in render_report(report):
        out.write(line + "\n")
    out.flush()

    if verbose and report.problem_found:
        _print_remediations(report, console)
        _print_summary(report, console)


def _print_remediations(report: Report, console: Console) -> None:
    seen_rules: set[str] = set()
    for f in report.findings:
        if f.rule_id in seen_rules:
            continue
        seen_rules.add(f.rule_id)
        hint = RULE_REMEDIATIONS.get(f.rule_id)
        if hint:
            console.print(Text.assemble(("[Fix] ", "dim"), f"[{f.rule_id}] {hint}"), soft_wrap=True)


def _print_summary(report: Report, console: Console) -> None:
    """Print a compact summary of findings per rule."""
    by_rule: dict[str, int] = {}
    for f in report.findings:
        by_rule[f.rule_id] = by_rule.get(f.rule_id, 0) + 1

    total = len(report.findings)
    parts = [f"{total} finding{'s' if total != 1 else ''}"]
    parts.extend(f"{count} {rule_id}" for rule_id, count in by_rule.items())
    console.print()
    console.print(Text(" | ".join(parts), style="bold"), soft_wrap=True)
