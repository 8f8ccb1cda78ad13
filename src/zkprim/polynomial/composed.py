from functools import reduce
from typing import List, Optional, Sequence

from ..errors import VariableCountMismatch
from .multilinear import MultilinearPolynomial


class ComposedMultilinear:
    """
    Product of multilinear polynomials sharing the same variables,
    `f(x) = polys[0](x) * polys[1](x) * ...`
    """

    def __init__(self, polys: List[MultilinearPolynomial]):
        if not polys:
            raise ValueError("At least one polynomial is required")

        num_vars = polys[0].num_vars
        for poly in polys[1:]:
            if poly.num_vars != num_vars:
                raise VariableCountMismatch(
                    "All polynomials must have the same number of variables"
                )
            if poly.p != polys[0].p:
                raise ValueError("Polynomials are defined over different fields")

        self.polys = polys
        self.num_vars = num_vars
        self.p = polys[0].p

    def degree(self) -> int:
        """Degree in each variable"""
        return len(self.polys)

    def evaluate(self, point: Sequence[int]) -> Optional[int]:
        result = 1
        for poly in self.polys:
            value = poly.evaluate(point)
            if value is None:
                return None
            result = result * value % self.p

        return result

    def partial_evaluate(self, points: Sequence[int]):
        return ComposedMultilinear([poly.partial_evaluate(points) for poly in self.polys])

    def to_evaluations(self) -> List[int]:
        """Element-wise product of every factor over the boolean hypercube"""
        p = self.p
        return reduce(
            lambda acc, evals: [a * b % p for a, b in zip(acc, evals)],
            (poly.to_evaluations() for poly in self.polys[1:]),
            list(self.polys[0].to_evaluations()),
        )
