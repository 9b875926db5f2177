"""
AI Prompt Templates
Separated from the client logic for better maintainability.
"""


def build_narrative_prompt(ticker: str, report_text: str) -> str:
    """
    Construct the recommendation prompt for one ticker.

    Args:
        ticker: Analyzed symbol
        report_text: Single-line rendering of the computed report
    """
    return (
        f"I've performed a fundamental analysis on the stock {ticker} and compared it to its sector. "
        f"My analysis report is: \"{report_text}\".\n\n"
        "Based on live and historical financial data, does this conclusion make sense? "
        "If not, please provide a brief and concise reason why. "
        "Do not provide a long-winded response, just the key details."
    )
