"""Console report for a review verdict."""

from commit_review.review.models import ReviewVerdict, Severity

RULE = "-" * 50

PASSED = "√ Code review passed."
FAILED = "X Code review was not passed. Please fix the following high-level issues and try again."
PARTIAL = "Some content failed to be reviewed, see the errors below."


def exit_code(verdict: ReviewVerdict) -> int:
    """Process exit status: 0 lets the commit through, 1 blocks it."""
    return 0 if verdict.passed else 1


def render_report(verdict: ReviewVerdict, show_normal: bool = False) -> str:
    """
    Format a verdict for the terminal.

    Only high severity issues are listed unless ``show_normal``. Errors are
    always listed so a partially reviewed diff is never reported silently.
    """
    lines = [PASSED if verdict.passed else FAILED]

    shown = [
        issue
        for issue in verdict.issues
        if show_normal or issue.severity == Severity.HIGH
    ]
    if shown:
        lines.extend(["", RULE, ""])
        for issue in shown:
            lines.append(
                f"- {issue.location}({issue.perspective}/{issue.severity.value}): "
                f"{issue.description}"
            )
            if issue.suggestion:
                lines.append(f"  suggestion: {issue.suggestion}")
            lines.append("")

    if verdict.errors:
        lines.extend(["", PARTIAL])
        lines.extend(f"- {type(error).__name__}: {error}" for error in verdict.errors)

    return "\n".join(lines).rstrip() + "\n"
