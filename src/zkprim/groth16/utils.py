"""Trusted setup helpers of Groth16 protocol"""

from dataclasses import dataclass
from typing import List

from ..ecc import Curve, EllipticCurve
from ..polynomial import PolynomialRing, vanishing_polynomial
from ..utils import get_random_int


@dataclass
class ToxicWaste:
    """
    Secret scalars of the trusted setup.
    Must be discarded once the reference string is generated.
    """

    tau: int
    alpha: int
    beta: int
    gamma: int
    delta: int

    @classmethod
    def generate(cls, order: int):
        return cls(
            tau=get_random_int(order - 1),
            alpha=get_random_int(order - 1),
            beta=get_random_int(order - 1),
            gamma=get_random_int(order - 1),
            delta=get_random_int(order - 1),
        )


def generate_t_poly(number_of_constraints: int, p: int) -> PolynomialRing:
    """
    Target polynomial `t(x) = (x - 1)(x - 2)...(x - n)`
    where `n` is the number of constraints
    """
    return vanishing_polynomial(number_of_constraints, p)


def _powers_of_tau(E: EllipticCurve, generator: Curve, tau: int, n: int) -> List[Curve]:
    powers = []
    tau_power = 1
    for _ in range(n):
        powers.append(tau_power)
        tau_power = tau_power * tau % E.order

    return E.batch_mul(generator, powers)


def generate_powers_of_tau_g1(E: EllipticCurve, tau: int, n: int) -> List[Curve]:
    """`[G1, tau*G1, tau^2*G1, ..., tau^(n-1)*G1]`"""
    return _powers_of_tau(E, E.G1(), tau, n)


def generate_powers_of_tau_g2(E: EllipticCurve, tau: int, n: int) -> List[Curve]:
    """`[G2, tau*G2, tau^2*G2, ..., tau^(n-1)*G2]`"""
    return _powers_of_tau(E, E.G2(), tau, n)


def generate_powers_of_tau_g1_alpha_or_beta(
    E: EllipticCurve, tau: int, alpha_or_beta: int, n: int
) -> List[Curve]:
    """`[s*G1, s*tau*G1, ..., s*tau^(n-1)*G1]` for `s` either alpha or beta"""
    return _powers_of_tau(E, E.G1() * (alpha_or_beta % E.order), tau, n)


def linear_combination_homomorphic_poly_eval_g1(
    poly: PolynomialRing, powers_of_secret_gx: List[Curve]
) -> Curve:
    """
    Evaluate `poly` at the secret point in the exponent,
    i.e. `sum(coeff_i * tau^i * G1)` from powers of tau in G1
    """
    return poly(powers_of_secret_gx)


def compute_l_i_of_tau_g1(
    a_poly_i: PolynomialRing,
    b_poly_i: PolynomialRing,
    c_poly_i: PolynomialRing,
    alpha_t_g1: List[Curve],
    beta_t_g1: List[Curve],
    t_g1: List[Curve],
) -> Curve:
    """
    Compute `(beta * a_i(tau) + alpha * b_i(tau) + c_i(tau)) * G1`
    from the alpha- and beta-scaled powers of tau
    """
    beta_a_i_of_tau = linear_combination_homomorphic_poly_eval_g1(a_poly_i, beta_t_g1)
    alpha_b_i_of_tau = linear_combination_homomorphic_poly_eval_g1(b_poly_i, alpha_t_g1)
    c_i_of_tau = linear_combination_homomorphic_poly_eval_g1(c_poly_i, t_g1)

    return beta_a_i_of_tau + alpha_b_i_of_tau + c_i_of_tau
