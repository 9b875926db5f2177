"""
Analysis Orchestrator - Central coordinator for one stock analysis.

Pipeline:
1. Validate ticker (empty tickers are rejected before any network activity)
2. Fan out: overview, insider transactions, daily prices (concurrently)
3. Compute metrics and compare with sector references
4. Assemble the structured report
5. Ask the narrative model for a recommendation
6. Publish report + recommendation to the session in one replacement

A failing source only blanks its own section of the report. Nothing is
retried, and a started run cannot be cancelled.
"""

import asyncio
from typing import Dict, Optional

from config.analysis_config import get_sector_averages
from config.constants import SEARCH_DEBOUNCE_SECONDS
from data_acquisition.orchestration.session_state import AnalysisSession
from data_acquisition.search.search_debouncer import SearchDebouncer
from data_acquisition.stock_data.alphavantage_fetcher import AlphaVantageFetcher
from fundamentals.ai_commentary.narrative_client import NarrativeClient
from fundamentals.financial_data.metric_computer import compute_metrics
from fundamentals.reporting.report_assembler import ReportAssembler
from fundamentals.valuation.sector_comparator import compare_to_sector
from utils.logger import setup_logger
from utils.unified_schema import AnalysisReport, SearchMatch

logger = setup_logger('analysis_orchestrator')

SOURCE_OVERVIEW = "overview"
SOURCE_INSIDER = "insider_transactions"
SOURCE_PRICES = "daily_time_series"


class InvalidTickerError(ValueError):
    """Raised when analysis is requested without a ticker."""


class AnalysisInProgressError(RuntimeError):
    """Raised when a second analysis is requested while one is running."""


def normalize_ticker(ticker: Optional[str]) -> str:
    return (ticker or "").strip().upper()


class AnalysisOrchestrator:
    """
    Coordinates data acquisition, computation and narrative for one session.

    Collaborators are injectable; defaults read keys from config.settings.
    """

    def __init__(
        self,
        gateway: Optional[AlphaVantageFetcher] = None,
        narrative_client: Optional[NarrativeClient] = None,
        sector_averages: Optional[Dict[str, float]] = None,
        session: Optional[AnalysisSession] = None,
    ):
        self.gateway = gateway or AlphaVantageFetcher()
        self.narrative_client = narrative_client or NarrativeClient()
        self.sector_averages = sector_averages if sector_averages is not None else get_sector_averages()
        self.session = session or AnalysisSession()

    async def analyze(self, ticker: Optional[str] = None) -> AnalysisReport:
        """
        Run the full pipeline for `ticker` (defaults to the session's ticker).

        Raises:
            InvalidTickerError: ticker is empty
            AnalysisInProgressError: another run on this session is not finished
        """
        symbol = normalize_ticker(ticker if ticker is not None else self.session.snapshot.ticker)
        if not symbol:
            raise InvalidTickerError("Please enter a ticker symbol to analyze.")
        if self.session.snapshot.is_analyzing:
            raise AnalysisInProgressError(f"An analysis for {self.session.snapshot.ticker} is already running.")

        logger.info(f"Starting analysis for {symbol}")
        self.session.begin_analysis(symbol)

        final_report = None
        try:
            report = await self._build_report(symbol)

            report_text = ReportAssembler.render_for_prompt(report)
            recommendation = await self.narrative_client.agenerate(symbol, report_text)

            final_report = ReportAssembler.attach_recommendation(report, recommendation)
            logger.info(f"Analysis completed for {symbol}")
            return final_report
        finally:
            self.session.finish_analysis(final_report)

    async def _build_report(self, symbol: str) -> AnalysisReport:
        overview, insider, series = await asyncio.gather(
            self.gateway.afetch_overview(symbol),
            self.gateway.afetch_insider_transactions(symbol),
            self.gateway.afetch_daily_time_series(symbol),
            return_exceptions=True,
        )

        fetched = {
            SOURCE_OVERVIEW: overview,
            SOURCE_INSIDER: insider,
            SOURCE_PRICES: series,
        }
        unavailable = []
        for source, value in fetched.items():
            if isinstance(value, BaseException):
                logger.error(f"{source} fetch for {symbol} raised {type(value).__name__}: {value}")
                fetched[source] = None
            if fetched[source] is None:
                unavailable.append(source)

        if unavailable:
            logger.warning(f"Partial data for {symbol}; unavailable: {', '.join(unavailable)}")

        metrics = compute_metrics(fetched[SOURCE_OVERVIEW], fetched[SOURCE_INSIDER], fetched[SOURCE_PRICES])
        statements = compare_to_sector(metrics, self.sector_averages)
        return ReportAssembler.build_report(symbol, metrics, statements, unavailable)

    def create_search(self, quiet_period: float = SEARCH_DEBOUNCE_SECONDS) -> SearchDebouncer:
        """Debounced search wired to this session's gateway and search slot."""
        return SearchDebouncer(
            self.gateway.asearch_symbols,
            quiet_period=quiet_period,
            on_change=self.session.update_search,
        )

    def select_match(self, search: SearchDebouncer, match: SearchMatch) -> str:
        """Adopt a search match as the session ticker; clears the candidate list."""
        symbol = normalize_ticker(search.select(match))
        self.session.set_ticker(symbol)
        return symbol

    def run(self, ticker: Optional[str] = None) -> AnalysisReport:
        """Synchronous entry point for scripts."""
        return asyncio.run(self.analyze(ticker))
