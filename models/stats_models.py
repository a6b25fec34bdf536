"""Translation usage statistics.

Stats is filled in by one greeting request and serialised in camelCase for the HTTP API.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final, Self

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

__all__: list[str] = ["UNIT_COST", "Stats"]

UNIT_COST: Final[float] = 0.00002  # estimated USD per character sent to the provider


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Stats(DataClassJsonMixin):
    """Counters for one request, or the sum of many.

    Attributes:
        api_calls (int): Provider calls attempted, including failed ones.
        chars_sent (int): Characters submitted to the provider.
        cost_estimate (float): chars_sent * UNIT_COST, accumulated per call.
        cache_hits (int): Lookups answered without calling the provider.
    """

    api_calls: int = 0
    chars_sent: int = 0
    cost_estimate: float = 0.0
    cache_hits: int = 0

    def record_api_call(self, text: str) -> None:
        """Account for submitting text to the provider, before the outcome is known."""
        self.api_calls += 1
        self.chars_sent += len(text)
        self.cost_estimate += len(text) * UNIT_COST

    def record_cache_hit(self) -> None:
        self.cache_hits += 1

    def merge(self, other: Stats) -> None:
        """Add another Stats into this one."""
        self.api_calls += other.api_calls
        self.chars_sent += other.chars_sent
        self.cost_estimate += other.cost_estimate
        self.cache_hits += other.cache_hits

    @property
    def has_activity(self) -> bool:
        return self.api_calls > 0 or self.cache_hits > 0

    def copy(self) -> Self:
        return replace(self)
