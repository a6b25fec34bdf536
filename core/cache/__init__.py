"""Translation cache package.

Provides the in-memory translation cache and its JSON snapshot persistence.
"""

from __future__ import annotations

from core.cache.manager import TranslationCache

__all__: list[str] = ["TranslationCache"]
