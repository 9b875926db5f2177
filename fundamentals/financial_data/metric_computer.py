"""
Metric Computer - Derived metrics from raw Alpha Vantage payloads.

Pure and deterministic, no I/O. Provider strings are parsed once into Optional[float] here.

Metrics:
- P/E and revenue per share (TTM), straight from the overview
- PEG proxy = P/E / PEG_PLACEHOLDER_GROWTH_RATE
    This is an approximation with a fixed placeholder growth rate, not a
    real PEG. It is only produced when both P/E and EPS are available.
- Free cash flow, straight from the overview
- One-month change and current price from the daily series
- Insider digest: up to INSIDER_DIGEST_LIMIT formatted transactions
"""

from dataclasses import dataclass
from typing import Optional, List, Tuple

import pandas as pd

from config import constants
from utils.numeric_utils import parse_provider_number, safe_divide
from utils.unified_schema import (
    CompanyOverview, InsiderTransaction, InsiderTransactions, DailyTimeSeries
)


@dataclass(frozen=True)
class ComputedMetrics:
    """Parsed metric values; None means unavailable."""
    pe: Optional[float] = None
    rps: Optional[float] = None
    eps: Optional[float] = None
    peg: Optional[float] = None
    free_cash_flow: Optional[float] = None
    one_month_change: Optional[float] = None
    current_price: Optional[float] = None
    insider_digest: str = constants.NO_INSIDER_TRANSACTIONS

    @property
    def has_comparison_inputs(self) -> bool:
        return self.pe is not None and self.rps is not None


def compute_peg_proxy(pe: Optional[float], eps: Optional[float]) -> Optional[float]:
    """P/E over the placeholder growth rate; requires both P/E and EPS."""
    if pe is None or eps is None:
        return None
    return safe_divide(pe, constants.PEG_PLACEHOLDER_GROWTH_RATE)


def compute_price_change(series: Optional[DailyTimeSeries]) -> Tuple[Optional[float], Optional[float]]:
    """
    Percent change between the earliest and latest close in the series.

    ISO-8601 date keys sort chronologically as plain strings.

    Returns:
        (change_pct, current_price). Both None when the series is empty,
        either close is unparsable, or the earliest close is zero.
    """
    if series is None or not series.time_series:
        return None, None

    closes = pd.Series(
        {date: parse_provider_number(bar.close) for date, bar in series.time_series.items()},
        dtype=object,
    ).sort_index()

    first_close = closes.iloc[0]
    last_close = closes.iloc[-1]
    if first_close is None or last_close is None or first_close == 0:
        return None, None

    change = (last_close - first_close) / first_close * 100
    return change, last_close


def format_insider_transaction(transaction: InsiderTransaction) -> Optional[str]:
    """
    '<date>: <owner> <bought|sold> <shares> shares at $<price>.'
    Entries without a date, owner or transaction code are skipped.
    """
    date = transaction.transaction_date
    owner = transaction.owner_name
    code = transaction.transaction_code
    if not date or not owner or not code:
        return None

    action = "bought" if code == "buy" else "sold"
    shares = transaction.transaction_shares or constants.NOT_AVAILABLE
    price = transaction.transaction_price or constants.NOT_AVAILABLE
    return f"{date}: {owner} {action} {shares} shares at ${price}."


def build_insider_digest(insider: Optional[InsiderTransactions], limit: int = constants.INSIDER_DIGEST_LIMIT) -> str:
    """Newline-joined digest of the first `limit` transactions (provider order)."""
    transactions: List[InsiderTransaction] = (insider.latest_transactions or []) if insider else []

    lines = []
    for transaction in transactions[:limit]:
        line = format_insider_transaction(transaction)
        if line:
            lines.append(line)

    if not lines:
        return constants.NO_INSIDER_TRANSACTIONS
    return "\n".join(lines)


def compute_metrics(
    overview: Optional[CompanyOverview],
    insider: Optional[InsiderTransactions],
    series: Optional[DailyTimeSeries],
) -> ComputedMetrics:
    """Compute every metric; each one degrades to None independently."""
    pe = rps = eps = fcf = None
    if overview is not None:
        pe = parse_provider_number(overview.pe_ratio)
        rps = parse_provider_number(overview.revenue_per_share_ttm)
        eps = parse_provider_number(overview.earnings_per_share)
        fcf = parse_provider_number(overview.free_cash_flow)

    change, price = compute_price_change(series)

    return ComputedMetrics(
        pe=pe,
        rps=rps,
        eps=eps,
        peg=compute_peg_proxy(pe, eps),
        free_cash_flow=fcf,
        one_month_change=change,
        current_price=price,
        insider_digest=build_insider_digest(insider),
    )
