"""
Narrative Client.
Uses the Google Gemini API to produce a short qualitative verdict on a report.

The output is opaque text. Every failure is returned as an "Error: ..."
string so the structured report is never lost because of this last step.
"""

import asyncio
from typing import Optional, Any

from config.settings import settings
from config import constants
from utils.http_utils import make_request, ProviderErrorKind
from utils.logger import setup_logger
from fundamentals.ai_commentary.prompts import build_narrative_prompt

logger = setup_logger('narrative_client')

BAD_NETWORK_RESPONSE = "Error: Bad network response."
PARSE_FAILURE = "Error: Failed to parse Gemini response."
MISSING_KEY = "Error: Gemini API key not configured."


def extract_candidate_text(result: Any) -> Optional[str]:
    """Walk candidates[0].content.parts[0].text; None if any step has the wrong shape."""
    if not isinstance(result, dict):
        return None
    candidates = result.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


class NarrativeClient:
    """
    Client for one-shot Gemini recommendations.
    Sampling (temperature, topP, topK) is fixed in config.constants.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or settings.GOOGLE_AI_KEY
        self.model = model or settings.GEMINI_MODEL
        if not self.api_key:
            logger.warning("Google AI Key not provided. Recommendations will be disabled.")

    def _build_payload(self, prompt: str) -> dict:
        return {
            "contents": [{
                "parts": [{"text": prompt}]
            }],
            "generationConfig": dict(constants.GEMINI_GENERATION_CONFIG),
        }

    def generate(self, ticker: str, report_text: str) -> str:
        """
        Ask Gemini whether the report's conclusion makes sense.

        Returns:
            The model's text, or an "Error: ..." string. Never raises.
        """
        if not self.api_key:
            return MISSING_KEY

        url = f"{constants.GEMINI_BASE_URL}/{self.model}:generateContent"
        payload = self._build_payload(build_narrative_prompt(ticker, report_text))

        result = make_request(
            url,
            method="POST",
            json_body=payload,
            headers={"x-goog-api-key": self.api_key},
            timeout=constants.GEMINI_TIMEOUT_SECONDS,
            source_name=f"Gemini {self.model}",
        )

        if not result.ok:
            if result.error.kind == ProviderErrorKind.NETWORK:
                return f"Error: {result.error.message}"
            if result.status_code == 200:
                # 200 with a body that is not JSON
                return PARSE_FAILURE
            return BAD_NETWORK_RESPONSE

        if result.status_code != 200:
            logger.warning(f"Unexpected status from {self.model}: {result.status_code}")
            return BAD_NETWORK_RESPONSE

        text = extract_candidate_text(result.data)
        if text is None:
            logger.warning(f"Unexpected response shape from {self.model}")
            return PARSE_FAILURE
        return text

    async def agenerate(self, ticker: str, report_text: str) -> str:
        return await asyncio.to_thread(self.generate, ticker, report_text)
