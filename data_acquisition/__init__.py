"""
Data Acquisition Module

Fetches search results, fundamentals, insider activity and prices from
Alpha Vantage, and coordinates analysis runs.

Main Entry Points:
    - AlphaVantageFetcher: provider gateway (search, overview, insider, daily prices)
    - SearchDebouncer: debounced, cancellable symbol search
    - AnalysisOrchestrator: concurrent fetch -> metrics -> report -> narrative
"""

from .stock_data.alphavantage_fetcher import AlphaVantageFetcher
from .search.search_debouncer import SearchDebouncer, SearchState, SearchPhase
from .orchestration.session_state import AnalysisSession, SessionSnapshot
from .orchestration.analysis_orchestrator import (
    AnalysisOrchestrator,
    InvalidTickerError,
    AnalysisInProgressError,
)

__all__ = [
    'AlphaVantageFetcher',
    'SearchDebouncer',
    'SearchState',
    'SearchPhase',
    'AnalysisSession',
    'SessionSnapshot',
    'AnalysisOrchestrator',
    'InvalidTickerError',
    'AnalysisInProgressError',
]
