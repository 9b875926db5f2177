"""
Report Assembler Module
=======================

Builds the immutable AnalysisReport from computed metrics and sector
statements, and renders the single-line summary handed to the narrative
model.
"""

from typing import List, Sequence

from config import constants
from fundamentals.financial_data.metric_computer import ComputedMetrics
from utils.numeric_utils import format_decimal, format_percent
from utils.unified_schema import AnalysisReport


class ReportAssembler:
    """
    Static utility class for assembling analysis reports.
    """

    @staticmethod
    def build_report(
        ticker: str,
        metrics: ComputedMetrics,
        sector_statements: Sequence[str],
        unavailable_sources: Sequence[str] = (),
    ) -> AnalysisReport:
        """
        Format metrics into report fields. Unavailable values keep the "N/A" default;
        the recommendation stays at its default until the narrative step.
        """
        return AnalysisReport(
            ticker=ticker,
            pe_ratio=format_decimal(metrics.pe),
            rps=format_decimal(metrics.rps),
            peg_ratio=format_decimal(metrics.peg),
            free_cash_flow=format_decimal(metrics.free_cash_flow),
            one_month_change=format_percent(metrics.one_month_change),
            current_price=format_decimal(metrics.current_price),
            insider_transactions_digest=metrics.insider_digest,
            sector_comparison=tuple(sector_statements),
            unavailable_sources=tuple(unavailable_sources),
        )

    @staticmethod
    def render_for_prompt(report: AnalysisReport) -> str:
        """
        One-line rendering for the narrative prompt.
        The digest keeps its line breaks flattened so the prompt quotes a single string.
        """
        digest = report.insider_transactions_digest.replace("\n", " ")
        parts = [
            f"P/E: {report.pe_ratio}",
            f"RPS: {report.rps}",
            f"PEG: {report.peg_ratio}",
            f"Free Cash Flow: {report.free_cash_flow}",
            f"1-Month Change: {report.one_month_change}",
            f"Insider Transactions: {digest}",
        ]
        text = ", ".join(parts)
        if report.sector_comparison:
            text += " Sector comparison: " + " ".join(report.sector_comparison)
        return text

    @staticmethod
    def attach_recommendation(report: AnalysisReport, recommendation: str) -> AnalysisReport:
        """Return a new report carrying the narrative text; the input is left untouched."""
        return report.model_copy(update={"recommendation": recommendation or constants.NO_RECOMMENDATION})

    @staticmethod
    def format_lines(report: AnalysisReport) -> List[str]:
        """Human-readable lines for console output."""
        lines = [
            "-" * 70,
            f"ANALYSIS REPORT: {report.ticker}",
            "-" * 70,
        ]
        if report.is_partial:
            lines.append(f"[NOTE] Unavailable data: {', '.join(report.unavailable_sources)} - report is partial.")
            lines.append("-" * 70)

        metrics = [
            ("P/E", report.pe_ratio),
            ("RPS", report.rps),
            ("PEG (placeholder growth)", report.peg_ratio),
            ("FCF", report.free_cash_flow),
            ("1-Month Change", report.one_month_change),
            ("Current Price", report.current_price),
        ]
        for label, value in metrics:
            lines.append(f"  {label:<26}: {value:>14}")

        lines.append("")
        lines.append("Sector Comparison:")
        for statement in report.sector_comparison:
            lines.append(f"  - {statement}")

        lines.append("")
        lines.append("Insider Transactions:")
        for line in report.insider_transactions_digest.splitlines():
            lines.append(f"  {line}")

        lines.append("")
        lines.append("Recommendation:")
        lines.append(report.recommendation)
        lines.append("-" * 70)
        return lines
