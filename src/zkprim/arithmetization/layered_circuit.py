import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from joblib import Parallel, delayed

from ..errors import (
    EmptyCircuit,
    IndexOutOfRange,
    LayerIndexOutOfRange,
    VariableCountMismatch,
)
from ..polynomial import MultilinearPolynomial
from ..utils import get_n_jobs, log2_ceil
from .wiring import hot_indices_to_mle, pack_gate_index

logger = logging.getLogger(__name__)


class GateType(Enum):
    ADD = "ADD"
    MUL = "MUL"

    def apply(self, left, right):
        """Apply the gate operation to two wire values"""
        if self is GateType.ADD:
            return left + right
        return left * right


@dataclass(frozen=True)
class Gate:
    """
    Binary gate whose `inputs` index the output vector of the next layer
    (or the raw input vector for the innermost layer).
    """

    gate_type: GateType
    inputs: Tuple[int, int]

    def __post_init__(self):
        object.__setattr__(self, "gate_type", GateType(self.gate_type))
        inputs = tuple(self.inputs)
        if len(inputs) != 2:
            raise ValueError(f"Gate takes exactly 2 inputs, got {len(inputs)}")
        object.__setattr__(self, "inputs", inputs)


@dataclass(frozen=True)
class CircuitLayer:
    gates: Tuple[Gate, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "gates", tuple(self.gates))

    def __len__(self):
        return len(self.gates)

    def __iter__(self):
        return iter(self.gates)

    def __getitem__(self, index):
        return self.gates[index]


@dataclass(frozen=True)
class CircuitEvaluation:
    """
    Evaluation trace of a circuit: `layers[0]` is the output layer
    and `layers[-1]` is the raw input vector.
    """

    layers: Tuple[tuple, ...]

    @property
    def outputs(self) -> tuple:
        return self.layers[0]

    @property
    def inputs(self) -> tuple:
        return self.layers[-1]

    def to_list(self) -> List[list]:
        return [list(layer) for layer in self.layers]

    def __len__(self):
        return len(self.layers)

    def __getitem__(self, index):
        return self.layers[index]


@dataclass(frozen=True)
class Circuit:
    """
    Layered arithmetic circuit. Layer 0 is the output layer and
    the last layer reads the raw input vector directly.

    `num_inputs` is the size of the raw input vector. Encoding the innermost
    layer needs it, since gates may read only part of the inputs.
    """

    layers: Tuple[CircuitLayer, ...]
    num_inputs: Optional[int] = None

    def __post_init__(self):
        layers = tuple(
            l if isinstance(l, CircuitLayer) else CircuitLayer(l) for l in self.layers
        )
        object.__setattr__(self, "layers", layers)

    @property
    def depth(self) -> int:
        return len(self.layers)

    @property
    def input_size(self) -> int:
        if self.num_inputs is None:
            raise VariableCountMismatch("Circuit does not declare its number of inputs")
        return self.num_inputs

    def layer_size(self, layer_index: int) -> int:
        self._check_layer_index(layer_index)
        return len(self.layers[layer_index])

    def next_layer_size(self, layer_index: int) -> int:
        """Size of the vector read by the gates of `layer_index`"""
        self._check_layer_index(layer_index)
        if layer_index == self.depth - 1:
            return self.input_size
        return len(self.layers[layer_index + 1])

    def _check_layer_index(self, layer_index: int):
        if not self.layers:
            raise EmptyCircuit("Circuit has no layers")
        if not 0 <= layer_index < self.depth:
            raise LayerIndexOutOfRange(layer_index, self.depth)

    def evaluate(self, inputs: Sequence, modulus: Optional[int] = None):
        """
        Evaluate the circuit from the innermost layer up to the output layer
        and return the whole trace.

        Values may be of any type supporting `+` and `*`. If `modulus` is given,
        every gate result is reduced modulo `modulus`.
        """
        if not self.layers:
            raise EmptyCircuit("Circuit has no layers")

        if self.num_inputs is not None and len(inputs) != self.num_inputs:
            raise VariableCountMismatch(
                f"Circuit expects {self.num_inputs} inputs, got {len(inputs)}"
            )

        current = list(inputs)
        trace = [tuple(current)]

        for layer_index in reversed(range(self.depth)):
            size = len(current)
            values = []
            for gate_index, gate in enumerate(self.layers[layer_index]):
                left, right = gate.inputs
                for wire in (left, right):
                    if not 0 <= wire < size:
                        raise IndexOutOfRange(layer_index, gate_index, wire, size)

                value = gate.gate_type.apply(current[left], current[right])
                if modulus is not None:
                    value %= modulus
                values.append(value)

            logger.debug("Evaluated layer %d with %d gates", layer_index, len(values))
            trace.append(tuple(values))
            current = values

        trace.reverse()
        return CircuitEvaluation(tuple(trace))

    def get_wiring_indices(self, layer_index: int) -> Tuple[Set[int], Set[int], int]:
        """
        Hypercube indices of the add gates and mul gates of `layer_index`,
        and the number of variables of the hypercube they live in
        """
        self._check_layer_index(layer_index)

        layer = self.layers[layer_index]
        next_size = self.next_layer_size(layer_index)
        if not layer:
            raise EmptyCircuit(f"Layer {layer_index} has no gates")
        if next_size == 0:
            raise EmptyCircuit(f"Layer {layer_index} reads from an empty vector")

        gate_bits = log2_ceil(len(layer))
        input_bits = log2_ceil(next_size)

        add_indices = set()
        mul_indices = set()
        for gate_index, gate in enumerate(layer):
            left, right = gate.inputs
            for wire in (left, right):
                if not 0 <= wire < next_size:
                    raise IndexOutOfRange(layer_index, gate_index, wire, next_size)

            index = pack_gate_index(gate_index, left, right, input_bits)
            if gate.gate_type is GateType.ADD:
                add_indices.add(index)
            else:
                mul_indices.add(index)

        logger.debug(
            "Layer %d wiring: m=%d, n=%d, %d add gates, %d mul gates",
            layer_index,
            gate_bits,
            input_bits,
            len(add_indices),
            len(mul_indices),
        )

        return add_indices, mul_indices, gate_bits + 2 * input_bits

    def get_add_and_mul_mle(
        self, layer_index: int, p: int
    ) -> Tuple[MultilinearPolynomial, MultilinearPolynomial]:
        """
        Multilinear extensions `(add_i, mul_i)` of the wiring predicates
        of `layer_index` over `F_p`, as functions of `(z, x, y)` where `z`
        addresses a gate of this layer and `x`, `y` its two inputs.
        """
        add_indices, mul_indices, num_vars = self.get_wiring_indices(layer_index)

        add_i = hot_indices_to_mle(add_indices, num_vars, p)
        mul_i = hot_indices_to_mle(mul_indices, num_vars, p)

        return add_i, mul_i

    def get_all_add_and_mul_mles(self, p: int, n_jobs: Optional[int] = None):
        """
        Wiring predicates of every layer, in layer order,
        encoded in parallel across layers
        """
        if not self.layers:
            raise EmptyCircuit("Circuit has no layers")

        n_jobs = get_n_jobs() if n_jobs is None else n_jobs
        return Parallel(n_jobs=n_jobs)(
            delayed(self.get_add_and_mul_mle)(i, p) for i in range(self.depth)
        )


def evaluate(circuit: Circuit, inputs: Sequence, modulus: Optional[int] = None):
    """Short for `circuit.evaluate(inputs, modulus)`"""
    return circuit.evaluate(inputs, modulus)


def get_add_and_mul_mle(circuit: Circuit, layer_index: int, p: int):
    """Short for `circuit.get_add_and_mul_mle(layer_index, p)`"""
    return circuit.get_add_and_mul_mle(layer_index, p)


class LayeredCircuit:
    """
    Builder of layered arithmetic circuits from labelled wires.

    Gates are added layer by layer starting from the inputs; each gate may only
    read the inputs (first layer) or outputs of the previous layer.
    """

    def __init__(self, inputs: List[str]):
        self.layers = [[]]
        self.inputs = list(inputs)
        self._used_vars = set(inputs)
        self._current_layer = 0
        self._allowed_inputs = set(inputs)

    def add_layer(self):
        """
        Add new layer
        """
        if self.layers[self._current_layer]:
            self._allowed_inputs = {
                output for _, _, _, output in self.layers[self._current_layer]
            }
            self.layers.append([])
            self._current_layer += 1

    def add_gate(self, gate_type, input1, input2, output):
        """
        Add new gate to the current layer
        """
        gate_type = GateType(gate_type)

        if input1 not in self._allowed_inputs or input2 not in self._allowed_inputs:
            raise ValueError(
                f"Gate inputs {input1}, {input2} must be from outputs "
                + "from previous layers or inputs from first layer"
            )

        if output in self._used_vars:
            raise ValueError(f"Variable already used: {output}")

        self._used_vars.add(output)
        self.layers[self._current_layer].append((gate_type, input1, input2, output))

    def add(self, input1, input2, output):
        """Short for `add_gate("ADD", input1, input2, output)`"""
        self.add_gate(GateType.ADD, input1, input2, output)

    def mul(self, input1, input2, output):
        """Short for `add_gate("MUL", input1, input2, output)`"""
        self.add_gate(GateType.MUL, input1, input2, output)

    def get_wire_label(self) -> List[List[str]]:
        """
        Get label of values at each layer of the compiled circuit,
        from the output layer down to the inputs
        """
        labels = [[output for _, _, _, output in layer] for layer in self.layers if layer]
        labels.reverse()
        labels.append(list(self.inputs))

        return labels

    def compile(self) -> Circuit:
        """Compile labelled gates into an index-based `Circuit`"""
        built_layers = [layer for layer in self.layers if layer]
        if not built_layers:
            raise EmptyCircuit("No gates were added")

        previous: Dict[str, int] = {label: i for i, label in enumerate(self.inputs)}
        circuit_layers = []
        for layer in built_layers:
            gates = [
                Gate(gate_type, (previous[input1], previous[input2]))
                for gate_type, input1, input2, _ in layer
            ]
            circuit_layers.append(CircuitLayer(gates))
            previous = {output: i for i, (_, _, _, output) in enumerate(layer)}

        circuit_layers.reverse()
        return Circuit(tuple(circuit_layers), num_inputs=len(self.inputs))

    def evaluate(self, input_map: dict, modulus: Optional[int] = None):
        """Evaluate the layered circuit and return all wires value."""
        if set(input_map.keys()) != set(self.inputs):
            raise ValueError("Insufficient input values are supplied")

        inputs = [input_map[label] for label in self.inputs]
        return self.compile().evaluate(inputs, modulus)
