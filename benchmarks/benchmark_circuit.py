import logging
import random

from zkprim.arithmetization import Circuit, CircuitLayer, Gate, GateType
from zkprim.constant import BN254_SCALAR_FIELD
from zkprim.utils import Timer

logging.basicConfig(level=logging.INFO, format="%(message)s")


def binary_tree_circuit(depth):
    """Full binary tree alternating ADD and MUL layers, 2^depth inputs"""
    layers = []
    for k in range(depth):
        gate_type = GateType.ADD if k % 2 else GateType.MUL
        layers.append(
            CircuitLayer([Gate(gate_type, (2 * i, 2 * i + 1)) for i in range(2**k)])
        )

    return Circuit(layers, num_inputs=2**depth)


def run(depth):
    circuit = binary_tree_circuit(depth)
    inputs = [random.randrange(BN254_SCALAR_FIELD) for _ in range(2**depth)]

    with Timer(f"[depth {depth}] evaluate"):
        circuit.evaluate(inputs, BN254_SCALAR_FIELD)

    with Timer(f"[depth {depth}] wiring predicates (sequential)"):
        for i in range(circuit.depth):
            circuit.get_add_and_mul_mle(i, BN254_SCALAR_FIELD)

    with Timer(f"[depth {depth}] wiring predicates (parallel)"):
        circuit.get_all_add_and_mul_mles(BN254_SCALAR_FIELD)


for d in [4, 5, 6, 7]:
    run(d)
