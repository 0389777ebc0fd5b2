# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from ssutils.randstate import RandState


def test_seeded_is_deterministic():
    a, b = RandState(1234), RandState(1234)
    assert [a.randbits(64) for _ in range(5)] == [b.randbits(64) for _ in range(5)]
    assert [a.randint(2, 10**20) for _ in range(5)] == [b.randint(2, 10**20) for _ in range(5)]


def test_different_seeds_diverge():
    assert RandState(1).randbits(128) != RandState(2).randbits(128)


@pytest.mark.parametrize("seed", [None, 0, 42])
def test_ranges(seed):
    rs = RandState(seed)
    for _ in range(200):
        assert 0 <= rs.randbits(7) < 2**7
        assert 5 <= rs.randint(5, 9) <= 9
    assert rs.randbits(0) == 0
    assert rs.randint(3, 3) == 3


def test_validates():
    rs = RandState(3)
    with pytest.raises(ValueError):
        rs.randbits(-1)
    with pytest.raises(ValueError):
        rs.randint(5, 4)


def test_clear_refuses_draws():
    rs = RandState(3)
    rs.clear()
    assert rs.cleared
    with pytest.raises(RuntimeError):
        rs.randbits(8)
    with pytest.raises(RuntimeError):
        rs.randint(1, 2)
    rs.clear()


def test_context_manager_clears():
    with RandState(5) as rs:
        assert not rs.cleared
        rs.randbits(16)
    assert rs.cleared
    assert rs.seed == 5
