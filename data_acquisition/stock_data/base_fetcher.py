"""
Base Fetcher - Common request/decode protocol for provider gateways.

Provides:
1. One place that performs the HTTP call and checks the provider's error envelope
2. Safe decoding into pydantic models (failures become None, never exceptions)
3. Diagnostics for the most recent failure (`last_error`)
"""

import asyncio
from abc import ABC
from typing import Optional, Dict, Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from utils.http_utils import make_request, ProviderError
from utils.logger import setup_logger
from utils.unified_schema import ProviderErrorEnvelope

logger = setup_logger('base_fetcher')

ModelT = TypeVar('ModelT', bound=BaseModel)


class BaseFetcher(ABC):
    """
    Abstract base class for provider gateways.
    Subclasses describe endpoints; this class owns request, envelope check and decode.
    """

    source_name = "API"

    def __init__(self, base_url: str, timeout: float):
        self.base_url = base_url
        self.timeout = timeout
        self.last_error: Optional[ProviderError] = None

    def _fetch_payload(self, params: Dict[str, Any], label: str) -> Optional[Any]:
        """
        Request JSON and reject error envelopes.

        Returns:
            The raw payload, or None after logging the failure.
        """
        result = make_request(self.base_url, params=params, timeout=self.timeout, source_name=self.source_name)
        if not result.ok:
            return self._fail(result.error, label)

        try:
            envelope = ProviderErrorEnvelope.detect(result.data)
        except ValidationError as e:
            # an envelope key is present but its value is not text
            return self._fail(ProviderError.malformed(f"Unreadable error envelope: {e.error_count()} errors"), label)
        if envelope is not None:
            if envelope.is_rate_limit:
                error = ProviderError.rate_limited(envelope.message)
            else:
                error = ProviderError.malformed(envelope.message)
            return self._fail(error, label)

        return result.data

    def _decode(self, payload: Any, model: Type[ModelT], label: str) -> Optional[ModelT]:
        """Validate a payload into `model`; a shape mismatch is logged and becomes None."""
        if not isinstance(payload, dict):
            return self._fail(ProviderError.malformed(f"Expected a JSON object, got {type(payload).__name__}"), label)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            return self._fail(ProviderError.malformed(f"Unexpected payload shape: {e.error_count()} errors"), label)

    def _fail(self, error: ProviderError, label: str) -> None:
        self.last_error = error
        logger.warning(f"{self.source_name} error for {label}: {error}")
        return None

    async def _in_thread(self, func, *args):
        """Run a blocking gateway call in a worker thread so calls can overlap."""
        return await asyncio.to_thread(func, *args)
