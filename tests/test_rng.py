import pytest

from maze.rng import Lcg, SeedSource, mix64, resolve_seed


def test_lcg_is_deterministic() -> None:
    a = Lcg(42)
    b = Lcg(42)
    assert [a.next_u64() for _ in range(10)] == [b.next_u64() for _ in range(10)]


def test_lcg_state_wraps_at_64_bits() -> None:
    rng = Lcg((1 << 64) + 5)
    assert rng.state == 5
    for _ in range(100):
        assert 0 <= rng.next_u64() < (1 << 64)


def test_below_stays_in_range_and_covers_it() -> None:
    rng = Lcg(7)
    seen = {rng.below(4) for _ in range(400)}
    assert seen == {0, 1, 2, 3}


def test_below_rejects_empty_range() -> None:
    with pytest.raises(ValueError):
        Lcg(1).below(0)


def test_choice_picks_members() -> None:
    rng = Lcg(11)
    items = ["a", "b", "c"]
    assert all(rng.choice(items) in items for _ in range(50))


def test_seed_source_counter_and_entropy() -> None:
    src = SeedSource(1)
    seeds = [src.next_seed() for _ in range(5)]

    assert src.counter == 5
    assert len(set(seeds)) == 5
    assert seeds[0] != SeedSource(2).next_seed()


def test_seed_source_default_entropy_is_random() -> None:
    assert SeedSource().entropy != SeedSource().entropy


def test_resolve_seed() -> None:
    assert resolve_seed(17) == 17
    assert resolve_seed(-1) == (1 << 64) - 1
    src = SeedSource(3)
    expected = SeedSource(3).next_seed()
    assert resolve_seed(src) == expected
    assert src.counter == 1
    assert 0 <= resolve_seed(None) < (1 << 64)


def test_mix64_scrambles_neighbours() -> None:
    assert mix64(1) != mix64(2)
    assert 0 <= mix64(12345) < (1 << 64)
