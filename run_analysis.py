"""
Stock Sector Analyzer - Single Stock Analyzer
Runs the full analysis pipeline for one ticker:
1. Concurrent data acquisition (overview, insider transactions, daily prices)
2. Metric computation and sector comparison
3. AI recommendation

Usage:
    python run_analysis.py AAPL
    python run_analysis.py AAPL --json
"""

import argparse
import sys

from utils.logger import setup_logger, set_logging_mode, LoggingContext
from utils.console_utils import (
    symbol, print_step, print_missing_keys, print_source_status, print_block
)
from config.settings import settings
from data_acquisition import AnalysisOrchestrator, InvalidTickerError
from fundamentals.reporting.report_assembler import ReportAssembler

logger = setup_logger('run_analysis')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Analyze a US stock against static sector references.")
    parser.add_argument('ticker', help="Ticker symbol, e.g. AAPL")
    parser.add_argument('--json', action='store_true', help="Print the report as JSON")
    parser.add_argument('--verbose', action='store_true', help="Show sub-module logs")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if not args.verbose:
        set_logging_mode(LoggingContext.ORCHESTRATED)

    print_missing_keys(settings.missing_keys())

    orchestrator = AnalysisOrchestrator()

    print_step(1, 2, f"Analyzing {args.ticker.upper()}")
    try:
        report = orchestrator.run(args.ticker)
    except InvalidTickerError as e:
        print(f"  {symbol.FAIL} {e}")
        return 2
    except KeyboardInterrupt:
        print("\n[!] Analysis cancelled by user.")
        return 130
    except Exception as e:
        logger.exception("Analysis pipeline failed")
        print(f"\n[ERROR] Pipeline failed: {e}")
        return 1

    print_source_status(report.unavailable_sources)

    print_step(2, 2, "Report")
    if args.json:
        print_block([report.model_dump_json(indent=2)])
    else:
        print_block(ReportAssembler.format_lines(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
