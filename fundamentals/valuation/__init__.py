"""
Valuation Module
Qualitative comparison of a company's multiples against static sector references.
"""

from .sector_comparator import compare_to_sector, MISSING_DATA_STATEMENT

__all__ = ['compare_to_sector', 'MISSING_DATA_STATEMENT']
