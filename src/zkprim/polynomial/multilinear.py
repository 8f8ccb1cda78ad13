from typing import Iterable, List, Optional, Sequence, Tuple

from ..errors import VariableCountMismatch
from ..utils import log2_ceil


class MultilinearPolynomial:
    """
    Dense Multilinear Polynomial represented by its evaluations
    over the boolean hypercube `{0,1}^num_vars` modulo `p`.

    Variable 0 is the most significant bit of the table index, so
    `evaluations[0b101]` is the value at `(x0, x1, x2) = (1, 0, 1)`.
    """

    def __init__(self, evaluations: Sequence[int], num_vars: int, p: int):
        if num_vars < 0 or len(evaluations) != 1 << num_vars:
            raise VariableCountMismatch(
                f"Table of {len(evaluations)} evaluations cannot "
                f"describe a {num_vars}-variate multilinear polynomial"
            )

        self.evaluations = [int(e) % p for e in evaluations]
        self.num_vars = num_vars
        self.p = p

    @classmethod
    def from_sparse(
        cls, num_vars: int, sparse_evaluations: Iterable[Tuple[int, int]], p: int
    ):
        """
        Constructs Multilinear Polynomial from tuple of evaluations `(index, eval)`
        of non-zero evaluation over boolean hypercube
        """
        size = 1 << num_vars
        evaluations = [0] * size
        for index, value in sparse_evaluations:
            if not 0 <= index < size:
                raise VariableCountMismatch(
                    f"Index {index} does not fit in {num_vars} variables"
                )
            evaluations[index] = value % p

        return cls(evaluations, num_vars, p)

    @classmethod
    def zero(cls, num_vars: int, p: int):
        return cls([0] * (1 << num_vars), num_vars, p)

    @classmethod
    def interpolate(cls, ys: Sequence[int], p: int):
        """
        Multilinear extension of `ys`, zero-padded to the next power of two
        """
        num_vars = log2_ceil(max(1, len(ys)))
        evaluations = list(ys) + [0] * ((1 << num_vars) - len(ys))
        return cls(evaluations, num_vars, p)

    def to_evaluations(self) -> List[int]:
        """Get all evaluations over boolean hypercube"""
        return self.evaluations

    def is_zero(self) -> bool:
        return all(e == 0 for e in self.evaluations)

    def partial_evaluate(self, points: Sequence[int]):
        """
        Fix the first `len(points)` variables to `points`
        and return the remaining multilinear polynomial
        """
        if len(points) > self.num_vars:
            raise VariableCountMismatch(
                f"Cannot fix {len(points)} variables of a "
                f"{self.num_vars}-variate polynomial"
            )

        p = self.p
        evals = self.evaluations
        for r in points:
            half = len(evals) // 2
            evals = [
                (lo + r * (hi - lo)) % p for lo, hi in zip(evals[:half], evals[half:])
            ]

        return MultilinearPolynomial(evals, self.num_vars - len(points), p)

    def evaluate(self, point: Sequence[int]) -> Optional[int]:
        """
        Evaluate polynomial at given `point`,
        return `None` if the point has the wrong number of coordinates
        """
        if len(point) != self.num_vars:
            return None

        return self.partial_evaluate(point).evaluations[0]

    def __call__(self, point: Sequence[int]) -> Optional[int]:
        return self.evaluate(point)

    def _check_compatible(self, other):
        if not isinstance(other, MultilinearPolynomial):
            raise TypeError(f"Cannot combine {type(self)} with {type(other)}")
        if self.p != other.p:
            raise ValueError("Polynomials are defined over different fields")

    def __add__(self, other):
        self._check_compatible(other)
        if self.num_vars != other.num_vars:
            raise VariableCountMismatch(
                f"Cannot add {self.num_vars}-variate and "
                f"{other.num_vars}-variate polynomials"
            )

        return MultilinearPolynomial(
            [a + b for a, b in zip(self.evaluations, other.evaluations)],
            self.num_vars,
            self.p,
        )

    def add_distinct(self, other):
        """
        Return `h(x, y) = self(x) + other(y)` over disjoint variable sets,
        where `x` are the leading variables
        """
        self._check_compatible(other)
        evaluations = [a + b for a in self.evaluations for b in other.evaluations]
        return MultilinearPolynomial(
            evaluations, self.num_vars + other.num_vars, self.p
        )

    def mul_distinct(self, other):
        """
        Return `h(x, y) = self(x) * other(y)` over disjoint variable sets,
        where `x` are the leading variables
        """
        self._check_compatible(other)
        evaluations = [a * b for a in self.evaluations for b in other.evaluations]
        return MultilinearPolynomial(
            evaluations, self.num_vars + other.num_vars, self.p
        )

    def extend_with_new_variables(self, num_new_vars: int):
        """
        Append `num_new_vars` trailing variables the polynomial does not depend on
        """
        repeat = 1 << num_new_vars
        evaluations = [e for e in self.evaluations for _ in range(repeat)]
        return MultilinearPolynomial(
            evaluations, self.num_vars + num_new_vars, self.p
        )

    def to_bytes(self) -> bytes:
        size = (self.p.bit_length() + 7) // 8
        return b"".join(e.to_bytes(size, "big") for e in self.evaluations)

    def __eq__(self, other):
        if not isinstance(other, MultilinearPolynomial):
            return NotImplemented
        return (
            self.p == other.p
            and self.num_vars == other.num_vars
            and self.evaluations == other.evaluations
        )

    def __hash__(self):
        return hash((self.p, self.num_vars, tuple(self.evaluations)))

    def __repr__(self):
        return f"MultilinearPolynomial(num_vars={self.num_vars}, evaluations={self.evaluations})"
