import random

import pytest

from bufrng.distributions import RandomGen
from bufrng.extensions import (
    LazyShuffle,
    RandomGenAdapter,
    hex_token,
    shuffle,
    shuffle_inplace,
    to_system_random,
)


def test_lazy_shuffle_picks_from_unsettled_elements(make_rng):
    # bytes 0x02 then 0x01: pick index 2 of 3, then index 1 of 2
    rng, _ = make_rng(0x00000102, 0)
    assert list(shuffle(["a", "b", "c"], rng)) == ["c", "b", "a"]


def test_lazy_shuffle_moves_last_into_hole(make_rng):
    rng, _ = make_rng(0, 0)
    assert list(shuffle(["a", "b", "c"], rng)) == ["a", "c", "b"]


def test_shuffle_inplace(make_rng):
    rng, _ = make_rng(0, 0)
    items = ["a", "b", "c"]
    shuffle_inplace(items, rng)
    assert items == ["b", "c", "a"]


def test_shuffle_is_a_permutation():
    rng = RandomGen.create_fast(10)
    source = list(range(100))
    first = list(shuffle(source, rng))
    second = list(shuffle(source, rng))
    assert sorted(first) == source
    assert sorted(second) == source
    assert first != second
    assert source == list(range(100))


def test_lazy_shuffle_reiterates_independently():
    rng = RandomGen.create_fast(4)
    lazy = LazyShuffle("abcdefgh", rng)
    it1 = iter(lazy)
    it2 = iter(lazy)
    assert next(it1) in "abcdefgh"
    assert sorted(it2) == list("abcdefgh")
    assert len(list(it1)) == 7


def test_empty_and_single_sequences(make_rng):
    rng, provider = make_rng(0, 0)
    assert list(shuffle([], rng)) == []
    assert list(shuffle(["only"], rng)) == ["only"]
    assert provider.calls == 0


def test_exhausted_iterator_stays_exhausted():
    it = iter(shuffle([1, 2, 3], RandomGen.create_fast(1)))
    assert len(list(it)) == 3
    assert it.remaining == 0
    assert next(it, "done") == "done"


def test_shuffle_rejects_none():
    with pytest.raises(TypeError):
        shuffle(None)
    with pytest.raises(TypeError):
        shuffle_inplace(None)


def test_shuffle_defaults_to_shared_generator():
    assert sorted(shuffle(range(10))) == list(range(10))


def test_hex_token(make_rng):
    rng, _ = make_rng(0x03020100, 0x07060504)
    assert hex_token(4, rng) == "00010203"
    assert len(hex_token()) == 16
    with pytest.raises(ValueError):
        hex_token(-1)


def test_adapter_random(make_rng):
    rng, _ = make_rng(-1, -1)
    adapter = RandomGenAdapter(rng)
    assert adapter.random() == 1.0 - 2.0 ** -53
    assert adapter.generator is rng


def test_adapter_getrandbits(make_rng):
    rng, _ = make_rng(0xAB000000, 0x11111111, 0x22222222)
    adapter = RandomGenAdapter(rng)
    assert adapter.getrandbits(8) == 0xAB
    assert adapter.getrandbits(40) == 0x1111111122
    assert adapter.getrandbits(0) == 0
    with pytest.raises(ValueError):
        adapter.getrandbits(-1)


def test_adapter_randbytes(make_rng):
    rng, _ = make_rng(0x03020100, 0x07060504)
    assert RandomGenAdapter(rng).randbytes(4) == bytes([0, 1, 2, 3])


def test_adapter_standard_helpers():
    adapter = to_system_random(RandomGen.create_fast(6))
    assert isinstance(adapter, random.Random)
    assert all(0 <= adapter.randrange(10) < 10 for _ in range(200))
    assert adapter.choice("xyz") in "xyz"
    items = list(range(20))
    adapter.shuffle(items)
    assert sorted(items) == list(range(20))
    assert len(adapter.sample(range(100), 5)) == 5


def test_adapter_cannot_be_reseeded():
    adapter = to_system_random(RandomGen.create_fast(6))
    adapter.seed()
    with pytest.raises(NotImplementedError):
        adapter.seed(1)
    with pytest.raises(NotImplementedError):
        adapter.getstate()
    with pytest.raises(NotImplementedError):
        adapter.setstate(None)
