"""
Sector Comparator.

Turns computed metrics into qualitative statements relative to the static
sector reference table (config.analysis_config).

Rules:
- P/E below the sector P/E -> undervalued, otherwise overvalued.
  A missing sector P/E counts as infinite, so it never flags overvaluation.
- Revenue per share above the sector RPS -> strong revenue generation,
  otherwise weaker. A missing sector RPS counts as 0.0.
- If either company metric is unavailable, no qualitative claim is made.
"""

import math
from typing import Dict, List

from fundamentals.financial_data.metric_computer import ComputedMetrics

MISSING_DATA_STATEMENT = "Cannot perform full comparison due to missing data."


def _reference(value: float) -> str:
    if math.isinf(value):
        return "the sector reference (none available)"
    return f"the sector average of {value:.2f}"


def compare_to_sector(metrics: ComputedMetrics, sector_averages: Dict[str, float]) -> List[str]:
    """
    Compare P/E and revenue per share with the sector references.

    Args:
        metrics: Output of compute_metrics
        sector_averages: Mapping with optional 'pe' and 'rps' keys

    Returns:
        Ordered list of statements (P/E first, then revenue), or the single
        missing-data statement.
    """
    if not metrics.has_comparison_inputs:
        return [MISSING_DATA_STATEMENT]

    sector_pe = sector_averages.get('pe', math.inf)
    sector_rps = sector_averages.get('rps', 0.0)

    statements = []
    if metrics.pe < sector_pe:
        statements.append(
            f"The P/E ratio of {metrics.pe:.2f} is below {_reference(sector_pe)}, "
            "suggesting the stock may be undervalued."
        )
    else:
        statements.append(
            f"The P/E ratio of {metrics.pe:.2f} is at or above the sector average of {sector_pe:.2f}, "
            "suggesting the stock may be overvalued."
        )

    if metrics.rps > sector_rps:
        statements.append(
            f"Revenue per share of {metrics.rps:.2f} exceeds the sector average of {sector_rps:.2f}, "
            "indicating strong revenue generation."
        )
    else:
        statements.append(
            f"Revenue per share of {metrics.rps:.2f} does not exceed the sector average of {sector_rps:.2f}, "
            "indicating weaker revenue generation."
        )

    return statements
