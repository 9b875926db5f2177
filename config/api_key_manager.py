import os
from typing import Dict, List, Optional


class APIKeyManager:
    """
    Keys for the analyzer's two providers, read from environment variables.
    A variable may hold 'key1,key2'; the first non-empty entry is used.
    """

    def __init__(self):
        self._keys: Dict[str, List[str]] = {}
        self._env_vars: Dict[str, str] = {}

    def register(self, name: str, env_var: str) -> None:
        """
        Read `env_var` and store its keys under `name` (e.g. 'ALPHAVANTAGE').
        An unset or blank variable registers no keys.
        """
        raw_value = os.getenv(env_var) or ""
        self._env_vars[name] = env_var
        self._keys[name] = [k.strip() for k in raw_value.split(',') if k.strip()]

    def get(self, name: str) -> Optional[str]:
        candidates = self._keys.get(name, [])
        return candidates[0] if candidates else None

    def has_key(self, name: str) -> bool:
        return bool(self._keys.get(name))

    def missing_env_vars(self) -> List[str]:
        """Environment variables that produced no key, in registration order."""
        return [env_var for name, env_var in self._env_vars.items() if not self.has_key(name)]
