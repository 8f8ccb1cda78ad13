import logging

import pytest

from zkprim.utils import (
    Timer,
    get_n_jobs,
    get_random_int,
    is_power_of_two,
    log2_ceil,
    next_power_of_two,
)


def test_log2_ceil():

    assert [log2_ceil(n) for n in (1, 2, 3, 4, 5, 8, 9)] == [0, 1, 2, 2, 3, 3, 4]

    with pytest.raises(ValueError):
        log2_ceil(0)


def test_power_of_two():

    assert next_power_of_two(5) == 8
    assert next_power_of_two(8) == 8
    assert is_power_of_two(16)
    assert not is_power_of_two(12)
    assert not is_power_of_two(0)


def test_random_int():

    assert all(1 <= get_random_int(3) <= 3 for _ in range(20))


def test_n_jobs(monkeypatch):

    monkeypatch.delenv("ZKPRIM_PARALLEL_CPU", raising=False)
    assert get_n_jobs() == -1

    monkeypatch.setenv("ZKPRIM_PARALLEL_CPU", "2")
    assert get_n_jobs() == 2


def test_timer(caplog):

    with caplog.at_level(logging.INFO, logger="zkprim.utils"):
        with Timer("evaluate"):
            pass

    assert "evaluate:" in caplog.text
