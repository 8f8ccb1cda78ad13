import logging
import os
import random
import time

logger = logging.getLogger(__name__)


def get_random_int(n_max):
    """Get random integer in [1, n_max] range"""
    rand = random.SystemRandom()
    return rand.randint(1, n_max)


def get_n_jobs():
    """Get number of supported cores for multiprocessing if enabled"""
    check_env = os.environ.get("ZKPRIM_PARALLEL_CPU")
    if check_env:
        return int(check_env)
    else:
        return -1


def next_power_of_two(n: int):
    """Get next 2^x number from n"""
    return 1 << (n - 1).bit_length()


def is_power_of_two(n):
    return n > 0 and (n & (n - 1)) == 0


def log2_ceil(n: int) -> int:
    """
    Number of bits needed to address `n` distinct values,
    i.e. `ceil(log2(n))`, with `log2_ceil(1) == 0`
    """
    if n < 1:
        raise ValueError(f"Cannot address {n} values")
    return (n - 1).bit_length()


class Timer:
    def __init__(self, name):
        self.start_time = 0
        self.end_time = 0
        self.name = name

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.time()
        elapsed_time = self.end_time - self.start_time
        logger.info("%s: %.2f seconds", self.name, elapsed_time)
