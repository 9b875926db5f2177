"""
Console Utilities - Terminal output for the run_* scripts.
Symbols fall back to ASCII on Windows consoles that cannot encode them.
"""

import os
from typing import Iterable, Sequence


class Symbol:
    """Status markers: Unicode on Posix terminals, ASCII on Windows."""

    @property
    def OK(self) -> str:
        return "[OK]" if os.name == 'nt' else "✓"

    @property
    def FAIL(self) -> str:
        return "[ERROR]" if os.name == 'nt' else "✗"

    @property
    def WARN(self) -> str:
        return "[WARN]" if os.name == 'nt' else "!"


symbol = Symbol()


def print_step(step: int, total: int, message: str):
    header = f"[{step}/{total}] {message}"
    print(f"\n{header}")
    print("-" * len(header))


def print_missing_keys(names: Iterable[str]):
    """Warn about unset API keys; the matching report sections will degrade."""
    for name in names:
        print(f"  {symbol.WARN} {name} is not set; that part of the report will be unavailable.")


def print_source_status(unavailable: Sequence[str]):
    if unavailable:
        print(f"  {symbol.WARN} Partial data: {', '.join(unavailable)}")
    else:
        print(f"  {symbol.OK} All data sources returned")


def print_matches(query: str, labels: Sequence[str]) -> bool:
    """
    List search candidates as 'SYMBOL - Name'.

    Returns:
        False when there was nothing to show.
    """
    if not labels:
        print(f"  {symbol.WARN} No US matches for '{query}'")
        return False
    for index, label in enumerate(labels, 1):
        print(f"  {index:>2}. {label}")
    return True


def print_block(lines: Iterable[str]):
    print("\n".join(lines))
    print("=" * 80)
