"""Structural errors raised by the layered circuit model."""


class CircuitError(Exception):
    """Base class of every circuit validation failure"""


class IndexOutOfRange(CircuitError, IndexError):
    """
    A gate input index points outside the layer (or raw input vector) it reads from.
    """

    def __init__(
        self,
        layer_index: int,
        gate_index: int,
        wire_index: int,
        size: int,
        message: str = None,
    ):
        self.layer_index = layer_index
        self.gate_index = gate_index
        self.wire_index = wire_index
        self.size = size
        super().__init__(
            message
            or f"Gate {gate_index} at layer {layer_index} reads wire {wire_index}, "
            f"but the referenced vector only has {size} values"
        )


class LayerIndexOutOfRange(IndexOutOfRange):
    """The requested layer does not exist in the circuit."""

    def __init__(self, layer_index: int, depth: int):
        self.depth = depth
        super().__init__(
            layer_index,
            None,
            layer_index,
            depth,
            f"Layer index {layer_index} out of range for circuit of depth {depth}",
        )


class EmptyCircuit(CircuitError, ValueError):
    pass


class VariableCountMismatch(CircuitError, ValueError):
    pass
