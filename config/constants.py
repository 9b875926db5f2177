"""
Centralized constants for the application.
Stores API base URLs, timeouts, and other magic numbers.
"""

from typing import Dict

# --- API Configuration ---

# Alpha Vantage
ALPHAVANTAGE_BASE_URL = "https://www.alphavantage.co/query"
ALPHAVANTAGE_TIMEOUT_SECONDS = 10

ALPHAVANTAGE_FUNCTIONS: Dict[str, str] = {
    'symbol_search': 'SYMBOL_SEARCH',
    'overview': 'OVERVIEW',
    'insider_transactions': 'INSIDER_TRANSACTIONS',
    'time_series_daily': 'TIME_SERIES_DAILY',
}

# Google Gemini
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
GEMINI_TIMEOUT_SECONDS = 60

# Sampling is fixed, not user-tunable
GEMINI_GENERATION_CONFIG: Dict[str, float] = {
    "temperature": 0.7,
    "topP": 0.95,
    "topK": 60,
}

# --- Symbol Search ---

SEARCH_TARGET_REGION = "United States"
SEARCH_DEBOUNCE_SECONDS = 1.0

# --- Metric Computation ---

# Placeholder growth rate (in percent) for the PEG proxy.
# Not a real growth figure: PEG here is simply P/E divided by this constant.
PEG_PLACEHOLDER_GROWTH_RATE = 10.0

INSIDER_DIGEST_LIMIT = 3

# --- Report Defaults ---

NOT_AVAILABLE = "N/A"
NO_INSIDER_TRANSACTIONS = "No recent transactions found."
NO_RECOMMENDATION = "No recommendation."
