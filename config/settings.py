"""
Configuration settings for the analyzer.
Loads the project-root .env file, then reads API keys and the Gemini model name.

Keys are opaque: only their presence is checked. A missing key never stops
import; it disables the matching provider and the report degrades.
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from .api_key_manager import APIKeyManager
from . import constants

# Load environment variables from .env
project_root = Path(__file__).parent.parent
load_dotenv(dotenv_path=project_root / '.env')


class Settings:
    """Process-wide settings; one instance is exported as `settings`."""

    def __init__(self):
        self.manager = APIKeyManager()
        self.manager.register('ALPHAVANTAGE', 'ALPHAVANTAGE_API_KEY')
        self.manager.register('GOOGLE', 'GOOGLE_AI_KEY')
        self.gemini_model = os.getenv('GEMINI_MODEL') or constants.GEMINI_DEFAULT_MODEL

    @property
    def ALPHAVANTAGE_API_KEY(self) -> str | None:
        return self.manager.get('ALPHAVANTAGE')

    @property
    def GOOGLE_AI_KEY(self) -> str | None:
        return self.manager.get('GOOGLE')

    @property
    def GEMINI_MODEL(self) -> str:
        return self.gemini_model

    def missing_keys(self) -> list[str]:
        """Names of the key variables that are unset, for start-up warnings."""
        return self.manager.missing_env_vars()

    @staticmethod
    def mask_api_key(api_key: str) -> str:
        """
        Keep the first and last 4 characters of a key for log output.

        Returns:
            e.g. 'ABCD...5678', or '****' for anything shorter than 8 characters
        """
        if not api_key or len(api_key) < 8:
            return "****"
        return f"{api_key[:4]}...{api_key[-4:]}"


settings = Settings()
