from .base_fetcher import BaseFetcher
from .alphavantage_fetcher import AlphaVantageFetcher, filter_by_region

__all__ = [
    'BaseFetcher',
    'AlphaVantageFetcher',
    'filter_by_region',
]
