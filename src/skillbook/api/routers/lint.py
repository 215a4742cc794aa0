"""Lint router."""

from fastapi import APIRouter, Depends

from skillbook.api.deps import get_context
from skillbook.api.schemas import LintIssueOut, LintReportOut
from skillbook.core.context import SharedContext

router = APIRouter()


@router.get("", response_model=LintReportOut)
def run_lint(ctx: SharedContext = Depends(get_context)) -> LintReportOut:
    """Lint the corpus with the configured rules."""
    report = ctx.lint()
    return LintReportOut(
        ok=report.ok,
        checked=report.checked,
        errors=len(report.errors),
        warnings=len(report.warnings),
        issues=[
            LintIssueOut(
                rule=issue.rule,
                severity=issue.severity.value,
                path=str(issue.path) if issue.path is not None else None,
                line=issue.line,
                message=issue.message,
            )
            for issue in report.sorted()
        ],
    )
