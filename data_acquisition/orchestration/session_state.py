"""
Analysis Session - Explicit state for one user of the analyzer.

Holds the slots a UI would bind to (ticker text, analyzing flag, latest
result, latest search state). Writers replace the whole snapshot; readers
only ever see complete snapshots. A rendering layer subscribes with
`add_listener` and stays a passive observer.
"""

from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from data_acquisition.search.search_debouncer import SearchState
from utils.unified_schema import AnalysisReport

ANALYZING_MESSAGE = "Analyzing..."
PROMPT_MESSAGE = "Enter a stock ticker to analyze."


@dataclass(frozen=True)
class SessionSnapshot:
    ticker: str = ""
    is_analyzing: bool = False
    result: Optional[AnalysisReport] = None
    search_state: SearchState = SearchState()


Listener = Callable[[SessionSnapshot], None]


class AnalysisSession:
    """Single-writer, many-reader state container."""

    def __init__(self):
        self._snapshot = SessionSnapshot()
        self._listeners: List[Listener] = []

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def status_message(self) -> str:
        """Placeholder text shown while no report is visible."""
        if self._snapshot.is_analyzing:
            return ANALYZING_MESSAGE
        if self._snapshot.result is None:
            return PROMPT_MESSAGE
        return ""

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _replace(self, **changes) -> SessionSnapshot:
        self._snapshot = replace(self._snapshot, **changes)
        for listener in list(self._listeners):
            listener(self._snapshot)
        return self._snapshot

    def set_ticker(self, ticker: str) -> None:
        self._replace(ticker=ticker)

    def update_search(self, state: SearchState) -> None:
        """Receiver for SearchDebouncer.on_change."""
        self._replace(search_state=state)

    def begin_analysis(self, ticker: str) -> None:
        """Interim state: previous result cleared, analyzing flag raised."""
        self._replace(ticker=ticker, is_analyzing=True, result=None)

    def finish_analysis(self, report: Optional[AnalysisReport]) -> None:
        """Publish the final report and clear the analyzing flag in one replacement."""
        self._replace(is_analyzing=False, result=report)

    def reset(self) -> None:
        """Clear ticker, result and search results."""
        self._replace(ticker="", result=None, search_state=SearchState())
