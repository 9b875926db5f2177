"""
Alpha Vantage Data Fetcher - Provider gateway for the analyzer.

API Endpoints:
- SYMBOL_SEARCH: Ticker candidates for free-text keywords
- OVERVIEW: Company profile and key metrics
- INSIDER_TRANSACTIONS: Latest insider buys/sells
- TIME_SERIES_DAILY: Daily OHLC bars (compact window, roughly the last 100 days)

Every call is independent and side-effect free apart from the request, so
any of them may run in parallel. Failures never raise: they are logged,
kept in `last_error`, and surface as None.
"""

from typing import Optional, List

from config.settings import settings
from config import constants
from utils.logger import setup_logger
from utils.http_utils import ProviderError
from utils.unified_schema import (
    SearchMatch, SymbolSearchResult, CompanyOverview,
    InsiderTransactions, DailyTimeSeries
)
from data_acquisition.stock_data.base_fetcher import BaseFetcher

logger = setup_logger('alphavantage_fetcher')


def filter_by_region(matches: List[SearchMatch], region: str = constants.SEARCH_TARGET_REGION) -> List[SearchMatch]:
    """Keep only matches listed in `region`, preserving their order."""
    return [m for m in matches if m.region == region]


class AlphaVantageFetcher(BaseFetcher):
    """
    Fetches search results, fundamentals, insider activity and prices from Alpha Vantage.
    """

    source_name = "Alpha Vantage"

    def __init__(self, api_key: Optional[str] = None):
        super().__init__(constants.ALPHAVANTAGE_BASE_URL, constants.ALPHAVANTAGE_TIMEOUT_SECONDS)
        self.api_key = api_key or settings.ALPHAVANTAGE_API_KEY

        if not self.api_key:
            logger.warning("Alpha Vantage API key not configured")

    def _query(self, function_key: str, label: str, **params) -> Optional[dict]:
        if not self.api_key:
            return self._fail(ProviderError.malformed("Alpha Vantage API key not configured"), label)

        query = {'function': constants.ALPHAVANTAGE_FUNCTIONS[function_key], **params, 'apikey': self.api_key}
        logger.info(f"Fetching {query['function']} for {label} from Alpha Vantage")
        return self._fetch_payload(query, label)

    def search_symbols(self, keywords: str) -> Optional[List[SearchMatch]]:
        """
        Search tickers by free text.

        Returns:
            US-listed matches in provider order, [] when the provider has no
            matches, None when the call failed.
        """
        label = f"'{keywords}' search"
        payload = self._query('symbol_search', label, keywords=keywords)
        if payload is None:
            return None

        result = self._decode(payload, SymbolSearchResult, label)
        if result is None:
            return None

        matches = filter_by_region(result.best_matches or [])
        logger.info(f"Search '{keywords}': {len(matches)} US matches")
        return matches

    def fetch_overview(self, symbol: str) -> Optional[CompanyOverview]:
        """Fetch the company overview (P/E, EPS, revenue per share, ...)."""
        label = f"{symbol} overview"
        payload = self._query('overview', label, symbol=symbol)
        if payload is None:
            return None
        return self._decode(payload, CompanyOverview, label)

    def fetch_insider_transactions(self, symbol: str) -> Optional[InsiderTransactions]:
        """Fetch the latest insider transactions, most recent first."""
        label = f"{symbol} insider transactions"
        payload = self._query('insider_transactions', label, symbol=symbol)
        if payload is None:
            return None
        return self._decode(payload, InsiderTransactions, label)

    def fetch_daily_time_series(self, symbol: str) -> Optional[DailyTimeSeries]:
        """Fetch daily OHLC bars keyed by ISO date."""
        label = f"{symbol} daily time series"
        payload = self._query('time_series_daily', label, symbol=symbol)
        if payload is None:
            return None
        return self._decode(payload, DailyTimeSeries, label)

    # --- Async counterparts (worker threads) ---

    async def asearch_symbols(self, keywords: str) -> Optional[List[SearchMatch]]:
        return await self._in_thread(self.search_symbols, keywords)

    async def afetch_overview(self, symbol: str) -> Optional[CompanyOverview]:
        return await self._in_thread(self.fetch_overview, symbol)

    async def afetch_insider_transactions(self, symbol: str) -> Optional[InsiderTransactions]:
        return await self._in_thread(self.fetch_insider_transactions, symbol)

    async def afetch_daily_time_series(self, symbol: str) -> Optional[DailyTimeSeries]:
        return await self._in_thread(self.fetch_daily_time_series, symbol)
