"""
Metric computation package.

Basic Principle: Raw Payloads -> Parse once -> Formulas -> Metrics
"""

from .metric_computer import (
    ComputedMetrics,
    compute_metrics,
    compute_price_change,
    compute_peg_proxy,
    build_insider_digest,
)

__all__ = [
    'ComputedMetrics',
    'compute_metrics',
    'compute_price_change',
    'compute_peg_proxy',
    'build_insider_digest',
]
