"""Tests for sharplint.reporting.console."""

import io

from rich.console import Console

from sharplint.findings.models import Finding, Location, Report
from sharplint.reporting.console import (
    NO_FINDINGS_MESSAGE,
    format_finding,
    print_report,
    render_report,
)


def _finding(rule_id: str, label: str, line: int, snippet: str) -> Finding:
    return Finding(rule_id=rule_id, label=label, location=Location(line=line, column=1, snippet=snippet))


def _capture(report: Report, verbose: bool = False) -> str:
    buffer = io.StringIO()
    console = Console(file=buffer, width=40, highlight=False)
    print_report(report, console=console, verbose=verbose)
    return buffer.getvalue()


def test_format_finding():
    f = _finding("public-field", "Public field", 7, "public int Balance;")
    assert format_finding(f) == "Public field found on line 7: public int Balance;"


def test_render_empty_report():
    assert render_report(Report()) == ["No bad practice found"]
    assert NO_FINDINGS_MESSAGE == "No bad practice found"


def test_render_report_keeps_order():
    report = Report(
        findings=(
            _finding("public-field", "Public field", 9, "public int b;"),
            _finding("public-non-readonly-field", "Public non-readonly field", 3, "public int a;"),
        )
    )
    assert render_report(report) == [
        "Public field found on line 9: public int b;",
        "Public non-readonly field found on line 3: public int a;",
    ]


def test_print_report_no_findings():
    assert _capture(Report()) == "No bad practice found\n"


def test_print_report_matches_rendered_lines():
    """Snippets are printed verbatim: no markup parsing and no wrapping."""
    snippet = "[Obsolete] public int[] Values = new int[] { 1, 2, 3, 4, 5, 6, 7, 8 };"
    report = Report(findings=(_finding("public-field", "Public field", 2, snippet),))
    assert _capture(report) == "\n".join(render_report(report)) + "\n"


def test_print_report_multiline_snippet():
    snippet = "if (a)\n{\n    if (b) { }\n}"
    report = Report(findings=(_finding("collapsible-nested-if", "Nested if statement that can be simplified", 4, snippet),))
    assert _capture(report) == "Nested if statement that can be simplified found on line 4: " + snippet + "\n"


def test_print_report_verbose_adds_hints_and_summary():
    report = Report(
        findings=(
            _finding("public-field", "Public field", 1, "public int a;"),
            _finding("public-field", "Public field", 2, "public int b;"),
            _finding("long-parameter-list", "Method with long parameter list", 3, "void M() { }"),
        )
    )
    output = _capture(report, verbose=True)
    assert output.count("[Fix] [public-field]") == 1
    assert "[Fix] [long-parameter-list]" in output
    assert "3 findings" in output


def test_verbose_has_no_effect_on_empty_report():
    assert _capture(Report(), verbose=True) == "No bad practice found\n"


def test_print_report_keeps_tabs_and_carriage_returns():
    snippet = "if (a)\r\n\t\t{\r\n\t\t\tif (b) { }\r\n\t\t}"
    report = Report(findings=(_finding("collapsible-nested-if", "Nested if statement that can be simplified", 5, snippet),))
    assert _capture(report) == "\n".join(render_report(report)) + "\n"
    assert "\t\t\tif (b) { }\r\n" in _capture(report)


def test_verbose_hints_follow_verbatim_lines():
    snippet = "public int\tx;"
    report = Report(findings=(_finding("public-field", "Public field", 1, snippet),))
    output = _capture(report, verbose=True)
    assert output.startswith("Public field found on line 1: public int\tx;\n")
    assert "[Fix] [public-field]" in output
