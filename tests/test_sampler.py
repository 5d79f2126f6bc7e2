import pytest

from weighted_distribution.config import SamplerConfig
from weighted_distribution.random_source import seeded_random
from weighted_distribution.sampler import WeightedSampler, draw_index, weighted_draw, weighted_draws


def _weight(pair):
    return pair[1]


def test_weighted_draw_frequencies_follow_weights():
    sampler = WeightedSampler(random_fn=seeded_random(1234))
    items = [("A", 1.0), ("B", 3.0)]

    counts = {"A": 0, "B": 0}
    for _ in range(100_000):
        result = sampler.draw(items, _weight)
        counts[result.item[0]] += 1

    ratio = counts["B"] / counts["A"]
    assert 2.85 <= ratio <= 3.15


def test_weighted_draw_empty_population_has_no_result():
    assert weighted_draw([], _weight, random_fn=lambda: 0.5) is None


def test_weighted_draw_zero_total_has_no_result():
    items = [("A", 0.0), ("B", 0.0)]
    for value in (0.0, 0.5, 0.999):
        assert weighted_draw(items, _weight, random_fn=lambda: value) is None


def test_weighted_draw_earlier_item_wins_tie():
    items = [("A", 1.0), ("B", 1.0)]

    # threshold lands exactly on the boundary between A and B
    result = weighted_draw(items, _weight, random_fn=lambda: 0.5)

    assert result.item == ("A", 1.0)
    assert result.index == 0
    assert result.weight == 1.0


def test_weighted_draw_keeps_value_equal_items_separate():
    items = ["x", "x", "y"]

    result = weighted_draw(items, lambda item: 1.0, random_fn=lambda: 0.5)

    assert result.item == "x"
    assert result.index == 1


def test_weighted_draw_none_item_is_a_valid_result():
    result = weighted_draw([None], lambda item: 1.0, random_fn=lambda: 0.0)

    assert result is not None
    assert result.item is None


def test_weighted_draw_evaluates_each_weight_once():
    calls = []

    def weight(item):
        calls.append(item)
        return 1.0

    weighted_draw(["a", "b", "c"], weight, random_fn=lambda: 0.9)

    assert calls == ["a", "b", "c"]


def test_draw_index_skips_zero_weight_prefix():
    assert draw_index([0.0, 0.0, 2.0], lambda: 0.25) == 2


def test_draw_index_negative_weights_can_miss_threshold():
    # running sum 1.0 -> -1.0 -> 1.0 reaches 0.99 at the first position
    assert draw_index([1.0, -2.0, 2.0], lambda: 0.99) == 0
    assert draw_index([1.0, -0.5, 0.2], lambda: 0.99) == 0
    assert draw_index([-1.0, 2.0], lambda: 0.99) == 1

    # threshold 1.05 is above every running sum (1.0, 0.5, 0.7)
    assert draw_index([1.0, -0.5, 0.2], lambda: 1.5) is None


def test_draw_index_negative_total_has_no_result():
    assert draw_index([1.0, -3.0], lambda: 0.5) is None


def test_weighted_draws_is_bounded_by_max_roll():
    draws = list(weighted_draws(["a", "b"], lambda item: 1.0, 5, random_fn=seeded_random(7)))

    assert len(draws) == 5
    assert all(draw.item in {"a", "b"} for draw in draws)


def test_weighted_draws_stops_immediately_on_zero_total():
    calls = []

    def weight(item):
        calls.append(item)
        return 0.0

    draws = list(weighted_draws(["a", "b"], weight, 10, random_fn=lambda: 0.5))

    assert draws == []
    assert calls == ["a", "b"]


def test_weighted_draws_recomputes_weights_per_draw():
    seen = []

    def weight(item):
        seen.append(item)
        return 1.0

    list(weighted_draws(["a", "b"], weight, 3, random_fn=lambda: 0.0))

    assert len(seen) == 6


def test_weighted_draws_is_lazy_and_single_pass():
    calls = []

    def weight(item):
        calls.append(item)
        return 1.0

    sequence = weighted_draws(["a"], weight, 3, random_fn=lambda: 0.0)
    assert calls == []

    assert next(sequence).item == "a"
    assert len(calls) == 1

    assert [draw.item for draw in sequence] == ["a", "a"]
    with pytest.raises(RuntimeError):
        iter(sequence)


def test_sampler_choice_returns_default_without_result():
    sampler = WeightedSampler(random_fn=lambda: 0.3)

    assert sampler.choice(["a", "b"], lambda item: 0.0, default="fallback") == "fallback"
    assert sampler.choice(["a", "b"], lambda item: 1.0) == "a"


def test_sampler_draws_uses_configured_max_roll():
    sampler = WeightedSampler(SamplerConfig(max_roll=4), random_fn=lambda: 0.0)

    assert len(list(sampler.draws(["a"], lambda item: 1.0))) == 4
    assert len(list(sampler.draws(["a"], lambda item: 1.0, max_roll=2))) == 2
