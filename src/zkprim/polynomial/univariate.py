from typing import List, Sequence, Union

from ..ecc import Curve


class PolynomialRing:
    def __init__(self, coeffs: Sequence[int], p: int):
        """
        Initialize the polynomial with coefficients.

        coeffs: List of coefficients, where coeffs[i] is the coefficient of x^i.
        p: Prime number representing the finite field.
        """
        coeffs = [int(coeff) % p for coeff in coeffs]
        while len(coeffs) > 1 and coeffs[-1] == 0:
            coeffs.pop()

        self.__coeffs = coeffs or [0]
        self.p = p

    def coeffs(self) -> List[int]:
        """Return the list of coefficents of the polynomial."""
        return self.__coeffs

    def degree(self) -> int:
        """Return the degree of the polynomial."""
        return len(self.__coeffs) - 1

    def leading_coefficient(self) -> int:
        """Return the leading coefficient"""
        return self.__coeffs[-1]

    def is_zero(self) -> bool:
        """Return the boolean whether the polynomial is equal to zero"""
        return all(c == 0 for c in self.__coeffs)

    def __bool__(self):
        return not self.is_zero()

    def __eq__(self, other):
        if isinstance(other, int):
            return self.degree() == 0 and self.__coeffs[0] == other % self.p
        if not isinstance(other, PolynomialRing):
            return NotImplemented
        return self.p == other.p and self.__coeffs == other.coeffs()

    def __hash__(self):
        return hash((self.p, tuple(self.__coeffs)))

    def __str__(self):
        """Return the string representation of the polynomial."""
        if self.is_zero():
            return "0"

        terms = []
        for i, coeff in enumerate(self.__coeffs):
            if coeff != 0:
                if i == 0:
                    terms.append(str(coeff))
                elif i == 1:
                    if coeff != 1:
                        terms.append(f"{coeff}*x")
                    else:
                        terms.append("x")
                else:
                    if coeff != 1:
                        terms.append(f"{coeff}*x^{i}")
                    else:
                        terms.append(f"x^{i}")

        return " + ".join(terms[::-1])

    def __repr__(self):
        return self.__str__()

    def __add__(self, other):
        if isinstance(other, int):
            coeffs = self.coeffs()[:]
            coeffs[0] += other

            return PolynomialRing(coeffs, self.p)

        max_degree = max(self.degree(), other.degree())
        result_coeffs = [
            (self.coeffs()[i] if i <= self.degree() else 0)
            + (other.coeffs()[i] if i <= other.degree() else 0)
            for i in range(max_degree + 1)
        ]
        return PolynomialRing(result_coeffs, self.p)

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        """Negate polynomial coefficients"""
        return PolynomialRing([-c for c in self.coeffs()], self.p)

    def __sub__(self, other):
        if isinstance(other, int):
            coeffs = self.coeffs()[:]
            coeffs[0] -= other

            return PolynomialRing(coeffs, self.p)

        return self + (-other)

    def __rsub__(self, other):
        return (-self).__add__(other)

    def __mul_by_polynomial(self, other):
        """Multiply two polynomials."""
        result_coeffs = [0] * (self.degree() + other.degree() + 1)
        for i, a in enumerate(self.coeffs()):
            if a == 0:
                continue
            for j, b in enumerate(other.coeffs()):
                result_coeffs[i + j] = (result_coeffs[i + j] + a * b) % self.p

        return PolynomialRing(result_coeffs, self.p)

    def __mul_by_constant(self, c):
        """Multiply polynomial by constant"""
        return PolynomialRing([c * coeff for coeff in self.coeffs()], self.p)

    def __mul__(self, other):
        if isinstance(other, PolynomialRing):
            return self.__mul_by_polynomial(other)
        elif isinstance(other, int):
            return self.__mul_by_constant(other)
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        """
        Divide two polynomials.
        Return quotient and remainder
        """
        if other.is_zero():
            raise ZeroDivisionError("Division by zero")
        if self.degree() < other.degree():
            return PolynomialRing([0], self.p), PolynomialRing(self.coeffs(), self.p)

        dividend = self.coeffs()[:]
        divisor = other.coeffs()

        n = other.degree()
        quotient = [0] * (self.degree() - n + 1)
        inv_lead = pow(divisor[n], -1, self.p)

        for k in reversed(range(0, len(quotient))):
            quotient[k] = dividend[n + k] * inv_lead % self.p
            for j in range(k, n + k + 1):
                dividend[j] = (dividend[j] - quotient[k] * divisor[j - k]) % self.p

        remainder = dividend[:n] or [0]

        return PolynomialRing(quotient, self.p), PolynomialRing(remainder, self.p)

    def __eval(self, point: int) -> int:
        """Evaluate the polynomial at point using Horner's rule"""
        result = 0
        for c in reversed(self.coeffs()):
            result = (result * point + c) % self.p
        return result

    def __eval_with_ecc(self, curves: List[Curve]) -> Curve:
        """
        Evaluate the polynomial over Elliptic Curve points,
        where `curves[i]` is the commitment to `x^i`
        """
        if len(curves) < len(self.coeffs()):
            raise ValueError(
                f"Need at least {len(self.coeffs())} points, got {len(curves)}"
            )

        result = [point * coeff for point, coeff in zip(curves, self.coeffs())]
        total = result[0]
        for c in result[1:]:
            total += c

        return total

    def __call__(self, point: Union[int, List[Curve]]):
        if isinstance(point, int):
            return self.__eval(point)
        elif isinstance(point, list):
            return self.__eval_with_ecc(point)
        else:
            raise TypeError(f"Invalid argument: {point}")


def vanishing_polynomial(degree: int, p: int):
    """Generate polynomial `T = (x - 1) * (x - 2) * (x - 3) ... (x - n)`"""
    poly = PolynomialRing([1], p)
    for i in range(1, degree + 1):
        poly *= PolynomialRing([-i, 1], p)

    return poly


def lagrange_basis(domain: Sequence[int], ys: Sequence[int], p: int):
    """
    Return the scaled Lagrange basis `[y_i * L_i(x)]` over `domain`,
    whose sum is the interpolating polynomial through `(domain[i], ys[i])`
    """
    if len(domain) != len(ys):
        raise ValueError("Length of domain and evaluations must be equal")

    basis = []
    for i, x_i in enumerate(domain):
        element = PolynomialRing([ys[i]], p)
        for j, x_j in enumerate(domain):
            if i == j:
                continue

            denominator = (x_i - x_j) % p
            if denominator == 0:
                raise ValueError(f"Duplicate point in domain: {x_i}")

            inv = pow(denominator, -1, p)
            element *= PolynomialRing([-x_j * inv, inv], p)

        basis.append(element)

    return basis


def lagrange_polynomial(x: Sequence[int], w: Sequence[int], p: int):
    """Return Lagrange interpolating polynomial through points `(x, w)` over Fp"""
    poly = PolynomialRing([0], p)
    for element in lagrange_basis(x, w, p):
        poly += element

    return poly
