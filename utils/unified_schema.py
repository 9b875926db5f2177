"""
Unified Data Schema
===================

Pydantic models for the Alpha Vantage payloads and for the synthesized
analysis report.

Provider Field Conventions
--------------------------
- SYMBOL_SEARCH and TIME_SERIES_DAILY use numeric-prefixed keys
  ("1. symbol", "4. close"); OVERVIEW uses capitalized keys ("PERatio").
- Every numeric value arrives as a string and stays a string in these
  models. Parsing into numbers happens once, in the metric computer.
- Fields use the provider key as alias; models also accept the Python
  field name, and unknown keys are ignored.

Error Envelope
--------------
A rate-limit or error response is a JSON object carrying "Note",
"Error Message" or "Information". It must be recognized before any domain
decode is attempted, because every domain field is optional and the
envelope would otherwise validate as an empty domain object.
"""

import uuid
from typing import Optional, Dict, Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from config.constants import NOT_AVAILABLE, NO_INSIDER_TRANSACTIONS, NO_RECOMMENDATION


ERROR_ENVELOPE_KEYS = ("Note", "Error Message", "Information")


class ProviderModel(BaseModel):
    """Base for provider payloads: alias-aware, lenient about numbers, read-only."""
    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra='ignore',
        frozen=True,
    )


class ProviderErrorEnvelope(ProviderModel):
    note: Optional[str] = Field(None, alias="Note")
    error_message: Optional[str] = Field(None, alias="Error Message")
    information: Optional[str] = Field(None, alias="Information")

    @classmethod
    def detect(cls, payload: Any) -> Optional["ProviderErrorEnvelope"]:
        """Return the envelope if `payload` is one, else None."""
        if not isinstance(payload, dict):
            return None
        if not any(key in payload for key in ERROR_ENVELOPE_KEYS):
            return None
        return cls.model_validate(payload)

    @property
    def is_rate_limit(self) -> bool:
        return self.error_message is None and (self.note is not None or self.information is not None)

    @property
    def message(self) -> str:
        return self.error_message or self.note or self.information or "Unknown error"


class SearchMatch(ProviderModel):
    """One candidate from SYMBOL_SEARCH. Identity is the symbol."""
    symbol: Optional[str] = Field(None, alias="1. symbol")
    name: Optional[str] = Field(None, alias="2. name")
    type: Optional[str] = Field(None, alias="3. type")
    region: Optional[str] = Field(None, alias="4. region")
    market_open: Optional[str] = Field(None, alias="5. marketOpen")
    market_close: Optional[str] = Field(None, alias="6. marketClose")
    timezone: Optional[str] = Field(None, alias="7. timezone")
    currency: Optional[str] = Field(None, alias="8. currency")
    match_score: Optional[str] = Field(None, alias="9. matchScore")

    _fallback_id: str = PrivateAttr(default_factory=lambda: uuid.uuid4().hex)

    @property
    def id(self) -> str:
        return self.symbol or self._fallback_id

    @property
    def display_label(self) -> Optional[str]:
        """'SYMBOL - Name' for list rendering; None when either part is missing."""
        if not self.symbol or not self.name:
            return None
        return f"{self.symbol} - {self.name}"


class SymbolSearchResult(ProviderModel):
    best_matches: Optional[List[SearchMatch]] = Field(None, alias="bestMatches")


class CompanyOverview(ProviderModel):
    symbol: Optional[str] = Field(None, alias="Symbol")
    name: Optional[str] = Field(None, alias="Name")
    sector: Optional[str] = Field(None, alias="Sector")
    pe_ratio: Optional[str] = Field(None, alias="PERatio")
    revenue_per_share_ttm: Optional[str] = Field(None, alias="RevenuePerShareTTM")
    earnings_per_share: Optional[str] = Field(None, alias="EPS")
    free_cash_flow: Optional[str] = Field(None, alias="FreeCashflow")


class InsiderTransaction(ProviderModel):
    filing_date: Optional[str] = None
    transaction_date: Optional[str] = None
    transaction_code: Optional[str] = None
    transaction_price: Optional[str] = None
    transaction_shares: Optional[str] = None
    owner_name: Optional[str] = None

    _fallback_id: str = PrivateAttr(default_factory=lambda: uuid.uuid4().hex)

    @property
    def id(self) -> str:
        return self.filing_date or self._fallback_id


class InsiderTransactions(ProviderModel):
    """Most-recent-first, as returned by the provider."""
    symbol: Optional[str] = None
    latest_transactions: Optional[List[InsiderTransaction]] = None


class DailyBar(ProviderModel):
    open: Optional[str] = Field(None, alias="1. open")
    high: Optional[str] = Field(None, alias="2. high")
    low: Optional[str] = Field(None, alias="3. low")
    close: Optional[str] = Field(None, alias="4. close")


class DailyTimeSeries(ProviderModel):
    """Date-keyed bars. The mapping is unordered: sort keys to walk it chronologically."""
    time_series: Optional[Dict[str, DailyBar]] = Field(None, alias="Time Series (Daily)")


class AnalysisReport(BaseModel):
    """
    Synthesized, immutable result of one analysis run.
    Every field starts at a sentinel so a report is complete even when
    every data source failed.
    """
    model_config = ConfigDict(frozen=True)

    ticker: str = ""
    pe_ratio: str = NOT_AVAILABLE
    rps: str = NOT_AVAILABLE
    peg_ratio: str = NOT_AVAILABLE
    free_cash_flow: str = NOT_AVAILABLE
    one_month_change: str = NOT_AVAILABLE
    current_price: str = NOT_AVAILABLE
    insider_transactions_digest: str = NO_INSIDER_TRANSACTIONS
    sector_comparison: Tuple[str, ...] = ()
    unavailable_sources: Tuple[str, ...] = ()
    recommendation: str = NO_RECOMMENDATION

    @property
    def is_partial(self) -> bool:
        return bool(self.unavailable_sources)
