import hashlib
import logging
from typing import List, Optional

from Crypto.Hash import keccak

from .ecc import ispoint

logger = logging.getLogger(__name__)


def _new_hasher(alg: str):
    if alg == "keccak256":
        return keccak.new(digest_bits=256)
    return hashlib.new(alg)


def _int_to_bytes(value: int) -> bytes:
    if value < 0:
        raise TypeError(f"Negative integer {value} is not supported as transcript")
    return value.to_bytes((value.bit_length() + 7) // 8 or 1, "big")


class FiatShamirTranscript:
    """
    Sequential hash-and-absorb transcript.

    Every sampled challenge is fed back into a fresh hasher,
    so consecutive samples differ even without new messages.
    """

    def __init__(self, label: bytes = b"", alg: str = "keccak256"):
        self.alg = alg
        self.label = label
        self.hasher = _new_hasher(alg)
        self.hasher.update(label)

    def reset(self):
        self.hasher = _new_hasher(self.alg)
        self.hasher.update(self.label)

    def append(self, data):
        if isinstance(data, bytes):
            self.hasher.update(data)
        elif isinstance(data, str):
            self.hasher.update(data.encode())
        elif isinstance(data, int):
            self.hasher.update(_int_to_bytes(data))
        elif data and isinstance(data, list) and isinstance(data[0], int):
            encoded = [_int_to_bytes(d) for d in data]
            for d in encoded:
                self.hasher.update(d)
        elif ispoint(data):
            self.hasher.update(data.to_bytes())
        elif data and isinstance(data, list) and ispoint(data[0]):
            for d in data:
                self.hasher.update(d.to_bytes())
        else:
            raise TypeError(f"Type of {type(data)} is not supported as transcript")

    def sample(self) -> bytes:
        digest = self.hasher.digest()
        self.hasher = _new_hasher(self.alg)
        self.hasher.update(digest)
        logger.debug("Sampled challenge %s", digest.hex())
        return digest

    def sample_n(self, n: int) -> List[bytes]:
        return [self.sample() for _ in range(n)]

    def get_challenge_scalar(self, order: Optional[int] = None) -> int:
        scalar = int.from_bytes(self.sample(), "big")
        if order is not None:
            scalar %= order
        return scalar
