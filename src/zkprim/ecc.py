from enum import Enum
from typing import List, Union

from joblib import Parallel, delayed
from py_ecc import optimized_bls12_381, optimized_bn128
from py_ecc.fields.optimized_field_elements import FQ, FQ2
from py_ecc.fields import (
    optimized_bn128_FQ,
    optimized_bn128_FQ2,
    optimized_bls12_381_FQ,
    optimized_bls12_381_FQ2,
)

from .utils import get_n_jobs


class CurveType(Enum):
    BN128 = optimized_bn128
    BN254 = optimized_bn128
    ALT_BN128 = optimized_bn128
    BLS12_381 = optimized_bls12_381


class CurveFQ(Enum):
    BN128 = optimized_bn128_FQ
    BN254 = optimized_bn128_FQ
    ALT_BN128 = optimized_bn128_FQ
    BLS12_381 = optimized_bls12_381_FQ


class CurveFQ2(Enum):
    BN128 = optimized_bn128_FQ2
    BN254 = optimized_bn128_FQ2
    ALT_BN128 = optimized_bn128_FQ2
    BLS12_381 = optimized_bls12_381_FQ2


class CurvePointSize(Enum):
    BN128 = 32
    BN254 = 32
    ALT_BN128 = 32
    BLS12_381 = 48


class EllipticCurve:
    def __init__(self, curve: str):
        self.name = curve
        self.curve = CurveType[curve].value.optimized_curve
        self.order = self.curve.curve_order
        self.field_modulus = self.curve.field_modulus
        self.__pairing = CurveType[curve].value.optimized_pairing.pairing

    def G1(self):
        """
        Return generator G1 of the curve
        """
        x, y, z = self.curve.G1
        return Curve(x, y, z, self.name, False)

    def G2(self):
        """
        Return generator G2 of the curve
        """
        x, y, z = self.curve.G2
        return Curve(x, y, z, self.name, False)

    def pairing(self, a, b):
        """
        Compute pairing, that is `e(a, b)`, where `a in G1` and `b in G2`
        """
        return self.__pairing(b.point, a.point)

    def batch_mul(self, g, s: List[int]):
        """
        Perform EC multiplication in parallel batch
        where g is Elliptic Curve point(s) and s is scalars
        """
        if not isinstance(g, list):
            g = [g] * len(s)

        if len(g) != len(s):
            raise ValueError(f"Got {len(g)} points but {len(s)} scalars")

        if len(g) == 0:
            return []

        return Parallel(n_jobs=get_n_jobs(), prefer="threads")(
            delayed(point.__mul__)(scalar) for point, scalar in zip(g, s)
        )

    def multiexp(self, g, s):
        """
        Perform Multi-Scalar-Multiplication (MSM)
        to compute sum of g[i] * s[i] where g is
        Elliptic Curve point and s is scalar
        """
        if len(g) == 0:
            raise ValueError("Got no points")

        if len(s) == 0:
            return g[0] * 0

        if len(s) > len(g):
            raise ValueError(f"Got {len(s)} scalars but only {len(g)} points")

        total = g[0] * 0
        for point, scalar in zip(g, s):
            total = total + point * scalar

        return total

    def __call__(self, x, y, z=1):
        return Curve(x, y, z, self.name, True)


class Curve:
    def __init__(
        self,
        x: Union[int, tuple],
        y: Union[int, tuple],
        z: Union[int, tuple],
        crv: str,
        verify=True,
    ):
        self.name = crv
        self.curve = CurveType[crv].value.optimized_curve
        fq = CurveFQ[crv].value
        fq2 = CurveFQ2[crv].value

        if (
            isinstance(x, (tuple, list))
            and isinstance(y, (tuple, list))
            and isinstance(z, (tuple, list))
        ):
            self.point = (fq2(x), fq2(y), fq2(z))
            if verify and not self.curve.is_on_curve(self.point, self.curve.b2):
                raise ValueError("Point is not on the curve")
        elif isinstance(x, int) and isinstance(y, int) and isinstance(z, int):
            self.point = (fq(x), fq(y), fq(z))
            if verify and not self.curve.is_on_curve(self.point, self.curve.b):
                raise ValueError("Point is not on the curve")
        else:
            # this point is not checked since it will come from internal arithmetic function
            self.point = (x, y, z)

    def __add__(self, other):
        if not isinstance(other, Curve):
            raise TypeError(
                f"Addition of {type(self)} with {type(other)} is not allowed"
            )

        result = self.curve.add(self.point, other.point)
        return Curve(result[0], result[1], result[2], self.name, False)

    def __radd__(self, other):
        return self.__add__(other)

    def __mul__(self, other):
        if not isinstance(other, int):
            raise TypeError(
                f"Multiplication of {type(self)} with {type(other)} is not allowed"
            )

        result = self.curve.multiply(self.point, other)
        return Curve(result[0], result[1], result[2], self.name, False)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        result = self.curve.neg(self.point)
        return Curve(result[0], result[1], result[2], self.name, False)

    def __eq__(self, other):
        if not isinstance(other, Curve):
            return NotImplemented
        return self.name == other.name and self.curve.eq(self.point, other.point)

    def __hash__(self):
        return hash(self.to_bytes())

    def __str__(self) -> str:
        return f"{self.curve.normalize(self.point)}"

    def __repr__(self) -> str:
        return self.__str__()

    def is_zero(self) -> bool:
        return self.curve.is_inf(self.point)

    def to_bytes(self) -> bytes:
        """Serialize the affine coordinates as big-endian integers"""
        point_size = CurvePointSize[self.name].value
        if self.is_zero():
            coords = [0, 0]
            if isinstance(self.point[0], FQ2):
                coords = [0, 0, 0, 0]
        else:
            x, y = self.curve.normalize(self.point)
            if isinstance(x, FQ) and isinstance(y, FQ):
                coords = [int(x), int(y)]
            elif isinstance(x, FQ2) and isinstance(y, FQ2):
                coords = [int(c) for c in x.coeffs] + [int(c) for c in y.coeffs]
            else:
                raise TypeError(f"Unknown field element type: {type(x)} and {type(y)}")

        return b"".join(int(c).to_bytes(point_size, "big") for c in coords)


def ispoint(x) -> bool:
    return isinstance(x, Curve)
