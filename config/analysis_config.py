"""
Analysis Configuration
Static reference values used when comparing a company against its sector.
"""

from typing import Dict

# --- Sector Reference Values ---
# Placeholder figures, not fetched or computed from peer groups.
# Keys: 'pe' (price/earnings), 'rps' (revenue per share, TTM).
DEFAULT_SECTOR_AVERAGES: Dict[str, float] = {
    'pe': 25.0,
    'rps': 20.0,
}


def get_sector_averages() -> Dict[str, float]:
    """Return a fresh copy of the reference table so callers can't mutate the defaults."""
    return dict(DEFAULT_SECTOR_AVERAGES)
