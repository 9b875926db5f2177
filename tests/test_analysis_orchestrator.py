"""
Tests for the analysis orchestrator and session state.
The gateway and narrative client are in-memory fakes; no HTTP is made.
"""

import asyncio

import pytest

from config import constants
from data_acquisition.orchestration.analysis_orchestrator import (
    AnalysisOrchestrator,
    AnalysisInProgressError,
    InvalidTickerError,
    SOURCE_INSIDER,
    SOURCE_OVERVIEW,
    SOURCE_PRICES,
    normalize_ticker,
)
from data_acquisition.orchestration.session_state import (
    AnalysisSession,
    ANALYZING_MESSAGE,
    PROMPT_MESSAGE,
)
from data_acquisition.search.search_debouncer import SearchPhase
from utils.unified_schema import CompanyOverview, DailyTimeSeries, InsiderTransactions, SearchMatch

AVERAGES = {"pe": 25.0, "rps": 20.0}


def _overview():
    return CompanyOverview.model_validate({
        "Symbol": "AAPL", "PERatio": "28.5", "EPS": "6.0", "RevenuePerShareTTM": "24.0",
        "FreeCashflow": "1000",
    })


def _insider():
    return InsiderTransactions.model_validate({"latest_transactions": [{
        "transaction_date": "2024-01-30", "owner_name": "Jane Doe", "transaction_code": "buy",
        "transaction_shares": "100", "transaction_price": "150",
    }]})


def _series():
    return DailyTimeSeries.model_validate({"Time Series (Daily)": {
        "2024-01-01": {"4. close": "100"},
        "2024-01-31": {"4. close": "110"},
    }})


class FakeGateway:
    def __init__(self, overview=None, insider=None, series=None, matches=None):
        self.results = {
            SOURCE_OVERVIEW: overview,
            SOURCE_INSIDER: insider,
            SOURCE_PRICES: series,
        }
        self.matches = matches or []
        self.calls = []

    async def _serve(self, source, symbol):
        self.calls.append((source, symbol))
        result = self.results[source]
        if isinstance(result, Exception):
            raise result
        return result

    async def afetch_overview(self, symbol):
        return await self._serve(SOURCE_OVERVIEW, symbol)

    async def afetch_insider_transactions(self, symbol):
        return await self._serve(SOURCE_INSIDER, symbol)

    async def afetch_daily_time_series(self, symbol):
        return await self._serve(SOURCE_PRICES, symbol)

    async def asearch_symbols(self, keywords):
        self.calls.append(("search", keywords))
        return self.matches


class FakeNarrative:
    def __init__(self, text="Hold."):
        self.text = text
        self.prompts = []

    async def agenerate(self, ticker, report_text):
        self.prompts.append((ticker, report_text))
        return self.text


def _orchestrator(gateway, narrative=None, session=None):
    return AnalysisOrchestrator(
        gateway=gateway,
        narrative_client=narrative or FakeNarrative(),
        sector_averages=AVERAGES,
        session=session or AnalysisSession(),
    )


def _full_gateway(**overrides):
    sources = {"overview": _overview(), "insider": _insider(), "series": _series()}
    sources.update(overrides)
    return FakeGateway(**sources)


# ---------------------------------------------------------------------------
# Analysis pipeline
# ---------------------------------------------------------------------------

def test_full_analysis_builds_report_and_recommendation():
    gateway = _full_gateway()
    narrative = FakeNarrative("Looks fairly valued; hold.")
    orchestrator = _orchestrator(gateway, narrative)

    report = orchestrator.run(" aapl ")

    assert report.ticker == "AAPL"
    assert report.pe_ratio == "28.50"
    assert report.peg_ratio == "2.85"
    assert report.one_month_change == "10.00%"
    assert report.current_price == "110.00"
    assert report.insider_transactions_digest == "2024-01-30: Jane Doe bought 100 shares at $150."
    assert "overvalued" in report.sector_comparison[0]
    assert "strong revenue generation" in report.sector_comparison[1]
    assert report.recommendation == "Looks fairly valued; hold."
    assert not report.is_partial

    assert sorted(source for source, _ in gateway.calls) == sorted([SOURCE_OVERVIEW, SOURCE_INSIDER, SOURCE_PRICES])
    ticker, prompt_text = narrative.prompts[0]
    assert ticker == "AAPL"
    assert "P/E: 28.50" in prompt_text
    assert "overvalued" in prompt_text

    snapshot = orchestrator.session.snapshot
    assert snapshot.result == report
    assert snapshot.is_analyzing is False


def test_failed_source_blanks_only_its_section():
    orchestrator = _orchestrator(_full_gateway(series=None))

    report = orchestrator.run("AAPL")

    assert report.unavailable_sources == (SOURCE_PRICES,)
    assert report.one_month_change == constants.NOT_AVAILABLE
    assert report.current_price == constants.NOT_AVAILABLE
    assert report.pe_ratio == "28.50"
    assert report.recommendation == "Hold."


def test_source_raising_is_treated_as_unavailable():
    orchestrator = _orchestrator(_full_gateway(overview=RuntimeError("boom")))

    report = orchestrator.run("AAPL")

    assert report.unavailable_sources == (SOURCE_OVERVIEW,)
    assert report.pe_ratio == constants.NOT_AVAILABLE
    assert report.sector_comparison == ("Cannot perform full comparison due to missing data.",)
    assert report.one_month_change == "10.00%"


def test_all_sources_missing_still_yields_complete_report():
    orchestrator = _orchestrator(FakeGateway())

    report = orchestrator.run("AAPL")

    assert set(report.unavailable_sources) == {SOURCE_OVERVIEW, SOURCE_INSIDER, SOURCE_PRICES}
    assert report.insider_transactions_digest == constants.NO_INSIDER_TRANSACTIONS
    assert report.recommendation == "Hold."


def test_empty_narrative_falls_back_to_default_recommendation():
    report = _orchestrator(_full_gateway(), FakeNarrative("")).run("AAPL")

    assert report.recommendation == constants.NO_RECOMMENDATION


@pytest.mark.parametrize("ticker", ["", "   ", None])
def test_empty_ticker_rejected_without_network(ticker):
    gateway = _full_gateway()
    orchestrator = _orchestrator(gateway)

    with pytest.raises(InvalidTickerError):
        orchestrator.run(ticker)

    assert gateway.calls == []
    assert orchestrator.session.snapshot.is_analyzing is False


def test_defaults_to_session_ticker():
    session = AnalysisSession()
    session.set_ticker("msft")

    report = _orchestrator(_full_gateway(), session=session).run()

    assert report.ticker == "MSFT"


def test_listeners_see_interim_then_final_state():
    session = AnalysisSession()
    seen = []
    session.add_listener(seen.append)
    orchestrator = _orchestrator(_full_gateway(), session=session)

    report = orchestrator.run("AAPL")

    interim, final = seen[-2], seen[-1]
    assert interim.is_analyzing is True
    assert interim.result is None
    assert final.is_analyzing is False
    assert final.result == report
    assert final.result.recommendation == "Hold."


def test_previous_result_cleared_when_new_analysis_starts():
    session = AnalysisSession()
    orchestrator = _orchestrator(_full_gateway(), session=session)
    orchestrator.run("AAPL")
    seen = []
    session.add_listener(seen.append)

    orchestrator.run("MSFT")

    assert seen[0].result is None
    assert seen[0].ticker == "MSFT"


def test_second_analysis_rejected_while_running():
    class BlockingNarrative(FakeNarrative):
        def __init__(self):
            super().__init__()
            self.entered = asyncio.Event()
            self.release = asyncio.Event()

        async def agenerate(self, ticker, report_text):
            self.entered.set()
            await self.release.wait()
            return "Done."

    async def scenario():
        narrative = BlockingNarrative()
        orchestrator = _orchestrator(_full_gateway(), narrative)
        first = asyncio.create_task(orchestrator.analyze("AAPL"))
        await narrative.entered.wait()

        assert orchestrator.session.status_message == ANALYZING_MESSAGE
        with pytest.raises(AnalysisInProgressError):
            await orchestrator.analyze("MSFT")

        narrative.release.set()
        return await first, orchestrator

    report, orchestrator = asyncio.run(scenario())

    assert report.ticker == "AAPL"
    assert report.recommendation == "Done."
    assert orchestrator.session.snapshot.is_analyzing is False


def test_narrative_exception_clears_analyzing_flag():
    class BrokenNarrative(FakeNarrative):
        async def agenerate(self, ticker, report_text):
            raise RuntimeError("narrative crashed")

    orchestrator = _orchestrator(_full_gateway(), BrokenNarrative())

    with pytest.raises(RuntimeError):
        orchestrator.run("AAPL")

    assert orchestrator.session.snapshot.is_analyzing is False
    assert orchestrator.session.snapshot.result is None


# ---------------------------------------------------------------------------
# Session and search wiring
# ---------------------------------------------------------------------------

def test_session_status_messages_and_reset():
    session = AnalysisSession()
    assert session.status_message == PROMPT_MESSAGE

    orchestrator = _orchestrator(_full_gateway(), session=session)
    orchestrator.run("AAPL")
    assert session.status_message == ""

    session.reset()
    assert session.snapshot.ticker == ""
    assert session.snapshot.result is None
    assert session.status_message == PROMPT_MESSAGE


def test_search_updates_session_and_selection_sets_ticker():
    match = SearchMatch.model_validate({"1. symbol": "aapl", "2. name": "Apple Inc", "4. region": "United States"})
    gateway = FakeGateway(matches=[match])
    orchestrator = _orchestrator(gateway)

    async def scenario():
        search = orchestrator.create_search(quiet_period=0.0)
        search.on_input("apple")
        await search.wait()
        found = orchestrator.session.snapshot.search_state.results
        chosen = orchestrator.select_match(search, found[0])
        return found, chosen

    found, chosen = asyncio.run(scenario())

    assert [m.symbol for m in found] == ["aapl"]
    assert chosen == "AAPL"
    snapshot = orchestrator.session.snapshot
    assert snapshot.ticker == "AAPL"
    assert snapshot.search_state.results == ()
    assert snapshot.search_state.phase == SearchPhase.IDLE
    assert ("search", "apple") in gateway.calls


def test_normalize_ticker():
    assert normalize_ticker(" brk.b ") == "BRK.B"
    assert normalize_ticker(None) == ""
