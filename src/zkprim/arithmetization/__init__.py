from .layered_circuit import (
    Circuit,
    CircuitEvaluation,
    CircuitLayer,
    Gate,
    GateType,
    LayeredCircuit,
    evaluate,
    get_add_and_mul_mle,
)
