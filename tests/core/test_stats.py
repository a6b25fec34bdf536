from __future__ import annotations

import asyncio

import pytest

from core.stats import StatsAggregator
from models.stats_models import UNIT_COST, Stats


def test_record_api_call_counts_characters_and_cost() -> None:
    stats = Stats()

    stats.record_api_call("Good morning, Ana!")

    assert stats.api_calls == 1
    assert stats.chars_sent == 18
    assert stats.cost_estimate == pytest.approx(18 * 0.00002)
    assert stats.has_activity is True


def test_cost_accumulates_per_call() -> None:
    stats = Stats()

    stats.record_api_call("abc")
    stats.record_api_call("defgh")

    assert stats.api_calls == 2
    assert stats.chars_sent == 8
    assert stats.cost_estimate == pytest.approx(8 * UNIT_COST)


def test_fresh_stats_have_no_activity() -> None:
    assert Stats().has_activity is False

    stats = Stats()
    stats.record_cache_hit()
    assert stats.has_activity is True


def test_merge_adds_every_counter() -> None:
    total = Stats(api_calls=1, chars_sent=10, cost_estimate=10 * UNIT_COST, cache_hits=2)

    total.merge(Stats(api_calls=2, chars_sent=5, cost_estimate=5 * UNIT_COST, cache_hits=1))

    assert total.api_calls == 3
    assert total.chars_sent == 15
    assert total.cost_estimate == pytest.approx(15 * UNIT_COST)
    assert total.cache_hits == 3


def test_to_dict_uses_camel_case_keys() -> None:
    stats = Stats(api_calls=1, chars_sent=19, cost_estimate=0.00038, cache_hits=0)

    assert stats.to_dict() == {"apiCalls": 1, "charsSent": 19, "costEstimate": 0.00038, "cacheHits": 0}


def test_copy_is_independent() -> None:
    stats = Stats(api_calls=1)

    copied = stats.copy()
    copied.api_calls += 1

    assert stats.api_calls == 1


@pytest.mark.asyncio
async def test_aggregator_sums_requests() -> None:
    aggregator = StatsAggregator()
    first = Stats()
    first.record_api_call("Good morning, Ana!")
    second = Stats()
    second.record_cache_hit()

    await asyncio.gather(aggregator.merge(first), aggregator.merge(second))
    total = await aggregator.snapshot()

    assert total.api_calls == 1
    assert total.chars_sent == 18
    assert total.cache_hits == 1
    assert await aggregator.request_count() == 2


@pytest.mark.asyncio
async def test_aggregator_snapshot_is_a_copy() -> None:
    aggregator = StatsAggregator()
    await aggregator.merge(Stats(cache_hits=1))

    snapshot = await aggregator.snapshot()
    snapshot.cache_hits = 100

    assert (await aggregator.snapshot()).cache_hits == 1
