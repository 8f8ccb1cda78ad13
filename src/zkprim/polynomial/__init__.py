from .univariate import (
    PolynomialRing,
    lagrange_basis,
    lagrange_polynomial,
    vanishing_polynomial,
)
from .multilinear import MultilinearPolynomial
from .composed import ComposedMultilinear
