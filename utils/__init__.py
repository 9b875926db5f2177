"""
Utilities module for the Stock Sector Analyzer.

--- Quick Reference ---

1. Numbers (numeric_utils.py)
   from utils.numeric_utils import parse_provider_number, format_decimal, format_percent
   - parse_provider_number("28.5")  provider string -> Optional[float]
   - format_decimal(value)          2 decimals, "N/A" when missing
   - format_percent(value)          "10.00%", "N/A" when missing

2. Logging (logger.py)
   from utils.logger import setup_logger
   - logger = setup_logger('module_name')

3. HTTP (http_utils.py)
   from utils.http_utils import make_request
   - make_request(url, params, source_name="API") -> HttpResult (data or ProviderError)
   - single attempt, no retries

4. Console output (console_utils.py)
   from utils.console_utils import symbol, print_step, print_matches, print_block

=== Notes ===
- Parse provider numbers with parse_provider_number(); never do arithmetic on raw strings
- Make HTTP requests through make_request(), not requests.get() directly
- Use setup_logger() for diagnostics, not print()
"""

from .logger import setup_logger, LoggingContext, set_logging_mode, get_logging_mode
from .numeric_utils import parse_provider_number, format_decimal, format_percent, safe_divide

__all__ = [
    'setup_logger',
    'LoggingContext',
    'set_logging_mode',
    'get_logging_mode',
    'parse_provider_number',
    'format_decimal',
    'format_percent',
    'safe_divide',
]
