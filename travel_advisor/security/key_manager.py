"""API key lookup and scrubbing.

All LLM calls read their key through here; nothing else calls ``os.getenv``
for secrets.
"""

from __future__ import annotations

import os
from typing import Optional

from travel_advisor.security.redact import redact_sensitive
from travel_advisor.shared.exceptions import KeyMissingError

LLM_KEY_NAMES = ("OPENROUTER_API_KEY", "OPENAI_API_KEY", "LLM_API_KEY")


class KeyManager:
    def __init__(self):
        self._keys: dict[str, str] = {}

    def get(self, name: str, *, required: bool = False) -> Optional[str]:
        value = self._keys.get(name)
        if value is None:
            value = os.getenv(name, "").strip()
            if value:
                self._keys[name] = value
            elif required:
                raise KeyMissingError(name)
            else:
                return None
        return value

    def get_llm_key(self, *, required: bool = False) -> Optional[str]:
        """First configured key in priority order."""
        for name in LLM_KEY_NAMES:
            value = self.get(name)
            if value:
                return value
        if required:
            raise KeyMissingError(LLM_KEY_NAMES[0])
        return None

    @staticmethod
    def redact(value: str) -> str:
        """Keep only the first and last four characters."""
        if not value or len(value) <= 8:
            return "****"
        return value[:4] + "****" + value[-4:]

    def scrub_text(self, text: str) -> str:
        result = str(text) if text is not None else ""
        for name, value in self._keys.items():
            if value and value in result:
                result = result.replace(value, f"[{name}:***REDACTED***]")
        return redact_sensitive(result)

    def reload(self, name: Optional[str] = None) -> None:
        """Re-read one key (or all known LLM keys) from the environment."""
        for key_name in (name,) if name else LLM_KEY_NAMES:
            self._keys.pop(key_name, None)
            self.get(key_name)


_manager: Optional[KeyManager] = None


def get_key_manager() -> KeyManager:
    global _manager
    if _manager is None:
        _manager = KeyManager()
    return _manager
