"""
Fundamentals module - Metric computation, sector comparison and narrative.
Consumes provider payloads (runtime) and the static sector table (reference) to produce a report.
"""

from .financial_data import ComputedMetrics, compute_metrics
from .valuation import compare_to_sector
from .reporting.report_assembler import ReportAssembler
from .ai_commentary.narrative_client import NarrativeClient

__all__ = [
    'ComputedMetrics',
    'compute_metrics',
    'compare_to_sector',
    'ReportAssembler',
    'NarrativeClient',
]
