"""
Groth16 trusted setup helpers
"""

from .utils import (
    ToxicWaste,
    compute_l_i_of_tau_g1,
    generate_powers_of_tau_g1,
    generate_powers_of_tau_g1_alpha_or_beta,
    generate_powers_of_tau_g2,
    generate_t_poly,
    linear_combination_homomorphic_poly_eval_g1,
)
