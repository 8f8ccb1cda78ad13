"""
Bit-packing of gate wiring onto the boolean hypercube.

A gate at address `i` of a layer reading `(a, b)` from the next layer
is identified by the hypercube vertex whose bits are `i || a || b`,
most significant block first. With `n` bits per input address:

    index = (i << 2n) | (a << n) | b

Prover and verifier must agree on this layout bit for bit.
"""

from typing import Iterable, List, Tuple

from ..errors import VariableCountMismatch
from ..polynomial import MultilinearPolynomial


def pack_gate_index(gate: int, left: int, right: int, input_bits: int) -> int:
    """Pack `(gate, left, right)` into a single hypercube index"""
    mask = (1 << input_bits) - 1
    if left & ~mask or right & ~mask:
        raise VariableCountMismatch(
            f"Inputs ({left}, {right}) do not fit in {input_bits} bits"
        )

    return (gate << (2 * input_bits)) | (left << input_bits) | right


def unpack_gate_index(index: int, input_bits: int) -> Tuple[int, int, int]:
    """Inverse of `pack_gate_index`"""
    mask = (1 << input_bits) - 1
    right = index & mask
    left = (index >> input_bits) & mask
    gate = index >> (2 * input_bits)

    return gate, left, right


def index_to_bits(index: int, num_vars: int) -> List[int]:
    """Hypercube point of `index`, variable 0 being the most significant bit"""
    if index >> num_vars:
        raise VariableCountMismatch(f"Index {index} does not fit in {num_vars} bits")

    return [(index >> (num_vars - 1 - k)) & 1 for k in range(num_vars)]


def wiring_point(
    gate: int, left: int, right: int, gate_bits: int, input_bits: int
) -> List[int]:
    """Boolean point `(z, x, y)` at which `add_i`/`mul_i` is queried for a gate"""
    index = pack_gate_index(gate, left, right, input_bits)
    return index_to_bits(index, gate_bits + 2 * input_bits)


def sparse_to_dense(hot_indices: Iterable[int], num_vars: int) -> List[int]:
    """
    Table of length `2^num_vars` that is one at `hot_indices` and zero elsewhere
    """
    size = 1 << num_vars
    table = [0] * size
    for index in hot_indices:
        if not 0 <= index < size:
            raise VariableCountMismatch(
                f"Index {index} does not fit in a table of {size} entries"
            )
        table[index] = 1

    return table


def hot_indices_to_mle(
    hot_indices: Iterable[int], num_vars: int, p: int
) -> MultilinearPolynomial:
    """Multilinear extension of the indicator function of `hot_indices`"""
    return MultilinearPolynomial(sparse_to_dense(hot_indices, num_vars), num_vars, p)
