from __future__ import annotations

"""Rate provider abstraction.

A provider only knows how to obtain a raw payload; validation and
normalization into a ``RateQuote`` happen in ``fetcher.RateFetcher`` so every
provider is held to the same rules.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Protocol


class RateProvider(ABC):
    name: str = "base"

    @abstractmethod
    def fetch_payload(self) -> Dict[str, Any]:
        """Return ``{"rate": ..., "date": ..., ...}``; raise HttpError on transport failure."""
        raise NotImplementedError


class SupportsFetch(Protocol):
    def fetch(self): ...  # noqa: D401
