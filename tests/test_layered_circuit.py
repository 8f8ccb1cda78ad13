import pytest
from py_ecc.fields import bn128_FQ

from zkprim.constant import BN254_SCALAR_FIELD
from zkprim.arithmetization import (
    Circuit,
    CircuitLayer,
    Gate,
    GateType,
    LayeredCircuit,
    evaluate,
)
from zkprim.errors import (
    CircuitError,
    EmptyCircuit,
    IndexOutOfRange,
    VariableCountMismatch,
)


@pytest.fixture
def circuit_data():
    #      100(*)           - layer 0
    #     /      \
    #   5(+)      20(*)     - layer 1
    #   / \       /  \
    #  2   3     4    5
    circuit1 = Circuit(
        [
            CircuitLayer([Gate(GateType.MUL, (0, 1))]),
            CircuitLayer([Gate(GateType.ADD, (0, 1)), Gate(GateType.MUL, (2, 3))]),
        ]
    )

    circuit2 = Circuit(
        [
            CircuitLayer([Gate(GateType.MUL, (0, 1)), Gate(GateType.MUL, (2, 3))]),
            CircuitLayer(
                [
                    Gate(GateType.MUL, (0, 0)),
                    Gate(GateType.MUL, (1, 1)),
                    Gate(GateType.MUL, (1, 2)),
                    Gate(GateType.MUL, (3, 3)),
                ]
            ),
        ]
    )

    circuit3 = Circuit(
        [
            CircuitLayer([Gate(GateType.ADD, (0, 1))]),
            CircuitLayer([Gate(GateType.ADD, (0, 1)), Gate(GateType.MUL, (2, 3))]),
            CircuitLayer(
                [
                    Gate(GateType.ADD, (0, 1)),
                    Gate(GateType.MUL, (2, 3)),
                    Gate(GateType.MUL, (4, 5)),
                    Gate(GateType.MUL, (6, 7)),
                ]
            ),
        ]
    )

    return [
        (circuit1, [2, 3, 4, 5], [[100], [5, 20], [2, 3, 4, 5]]),
        (circuit2, [3, 2, 3, 1], [[36, 6], [9, 4, 6, 1], [3, 2, 3, 1]]),
        (
            circuit3,
            [2, 3, 1, 4, 1, 2, 3, 4],
            [[33], [9, 24], [5, 4, 2, 12], [2, 3, 1, 4, 1, 2, 3, 4]],
        ),
    ]


def test_circuit_evaluation(circuit_data):

    for circuit, inputs, expected in circuit_data:
        evaluation = circuit.evaluate(inputs)

        assert evaluation.to_list() == expected
        assert evaluation == evaluate(circuit, inputs)


def test_evaluation_trace_shape(circuit_data):

    for circuit, inputs, _ in circuit_data:
        evaluation = circuit.evaluate(inputs)

        assert len(evaluation) == circuit.depth + 1
        assert list(evaluation.inputs) == inputs
        assert evaluation.outputs == evaluation[0]
        for k in range(circuit.depth):
            assert len(evaluation[k]) == len(circuit.layers[k])


def test_evaluation_with_modulus(circuit_data):

    circuit, inputs, _ = circuit_data[0]

    assert circuit.evaluate(inputs, 7).to_list() == [[2], [5, 6], [2, 3, 4, 5]]

    p = BN254_SCALAR_FIELD
    evaluation = circuit.evaluate([p - 1, 1, p - 2, 2], p)
    assert evaluation.to_list() == [[0], [0, p - 4], [p - 1, 1, p - 2, 2]]


def test_evaluation_over_field_elements(circuit_data):

    for circuit, inputs, expected in circuit_data:
        evaluation = circuit.evaluate([bn128_FQ(x) for x in inputs])

        assert [[int(v) for v in layer] for layer in evaluation.layers] == expected


def test_gate_type_from_label():

    assert Gate("ADD", [0, 1]) == Gate(GateType.ADD, (0, 1))
    assert GateType.MUL.apply(3, 4) == 12
    assert GateType.ADD.apply(3, 4) == 7

    with pytest.raises(ValueError):
        Gate("SUB", (0, 1))

    with pytest.raises(ValueError):
        Gate(GateType.ADD, (0, 1, 2))


def test_input_index_out_of_range():

    circuit = Circuit(
        [
            CircuitLayer([Gate(GateType.MUL, (0, 1))]),
            CircuitLayer([Gate(GateType.ADD, (0, 1)), Gate(GateType.MUL, (2, 4))]),
        ]
    )

    with pytest.raises(IndexOutOfRange) as exc:
        circuit.evaluate([2, 3, 4, 5])

    assert exc.value.layer_index == 1
    assert exc.value.gate_index == 1
    assert exc.value.wire_index == 4
    assert exc.value.size == 4
    assert isinstance(exc.value, IndexError)
    assert isinstance(exc.value, CircuitError)


def test_inner_layer_index_out_of_range():

    circuit = Circuit(
        [
            CircuitLayer([Gate(GateType.MUL, (0, 2))]),
            CircuitLayer([Gate(GateType.ADD, (0, 1)), Gate(GateType.MUL, (2, 3))]),
        ]
    )

    with pytest.raises(IndexOutOfRange) as exc:
        circuit.evaluate([2, 3, 4, 5])

    assert exc.value.layer_index == 0
    assert exc.value.wire_index == 2
    assert exc.value.size == 2

    negative = Circuit([CircuitLayer([Gate(GateType.MUL, (-1, 0))])])
    with pytest.raises(IndexOutOfRange):
        negative.evaluate([1, 2])


def test_degenerate_circuits():

    with pytest.raises(EmptyCircuit):
        Circuit([]).evaluate([1, 2])

    circuit = Circuit([CircuitLayer([Gate(GateType.ADD, (0, 1))])], num_inputs=2)
    assert circuit.evaluate([1, 2]).to_list() == [[3], [1, 2]]

    with pytest.raises(VariableCountMismatch):
        circuit.evaluate([1, 2, 3])


def test_input_size():

    circuit = Circuit([CircuitLayer([Gate(GateType.ADD, (0, 1))])], num_inputs=8)
    assert circuit.input_size == 8
    assert circuit.next_layer_size(0) == 8

    circuit = Circuit([CircuitLayer([Gate(GateType.ADD, (0, 5))])])
    with pytest.raises(VariableCountMismatch):
        _ = circuit.input_size

    with pytest.raises(VariableCountMismatch):
        circuit.next_layer_size(0)


@pytest.fixture
def layered_circuit_data():

    circuit1 = LayeredCircuit(["x", "y"])
    circuit1.add_gate("ADD", "x", "y", "z")
    circuit1.add_layer()
    circuit1.add_gate("MUL", "z", "z", "zz")

    circuit2 = LayeredCircuit(["x", "y", "u", "v"])
    circuit2.add_gate("ADD", "x", "y", "z1")
    circuit2.add_gate("MUL", "x", "y", "z2")
    circuit2.add_gate("MUL", "x", "y", "z3")
    circuit2.add_gate("MUL", "u", "v", "w")
    circuit2.add_gate("ADD", "x", "x", "xx")
    circuit2.add_layer()
    circuit2.add_gate("MUL", "z1", "z2", "zz")
    circuit2.add_gate("MUL", "z1", "z3", "zzz")
    circuit2.add_gate("MUL", "w", "w", "ww")
    circuit2.add_gate("ADD", "xx", "xx", "xxx")
    circuit2.add_layer()
    circuit2.add_gate("ADD", "zzz", "zz", "a")
    circuit2.add_gate("MUL", "zzz", "ww", "b")
    circuit2.add_gate("MUL", "xxx", "xxx", "xxxx")

    circuit3 = LayeredCircuit(["a1", "a2", "a3", "a4"])
    circuit3.mul("a1", "a1", "b1")
    circuit3.mul("a2", "a2", "b2")
    circuit3.mul("a2", "a3", "b3")
    circuit3.mul("a4", "a4", "b4")
    circuit3.add_layer()
    circuit3.mul("b1", "b2", "c1")
    circuit3.mul("b3", "b4", "c2")

    return [circuit1, circuit2, circuit3]


def test_layered_circuit_compile(layered_circuit_data, circuit_data):
    circuit1, circuit2, circuit3 = layered_circuit_data

    assert circuit1.compile() == Circuit(
        [
            CircuitLayer([Gate(GateType.MUL, (0, 0))]),
            CircuitLayer([Gate(GateType.ADD, (0, 1))]),
        ],
        num_inputs=2,
    )

    expected, _, _ = circuit_data[1]
    assert circuit3.compile().layers == expected.layers
    assert circuit3.compile().num_inputs == 4

    compiled = circuit2.compile()
    assert compiled.depth == 3
    assert [len(layer) for layer in compiled.layers] == [3, 4, 5]


def test_layered_circuit_evaluate(layered_circuit_data):
    circuit1, circuit2, circuit3 = layered_circuit_data

    assert circuit1.evaluate({"x": 2, "y": 3}).to_list() == [[25], [5], [2, 3]]
    assert circuit3.evaluate({"a1": 3, "a2": 2, "a3": 3, "a4": 1}).to_list() == [
        [36, 6],
        [9, 4, 6, 1],
        [3, 2, 3, 1],
    ]

    # x = 1, y = 2, u = 3, v = 4
    # z1 = 3, z2 = z3 = 2, w = 12, xx = 2
    # zz = zzz = 6, ww = 144, xxx = 4
    # a = 12, b = 864, xxxx = 16
    evaluation = circuit2.evaluate({"x": 1, "y": 2, "u": 3, "v": 4})
    assert evaluation.outputs == (12, 864, 16)
    assert evaluation[1] == (6, 6, 144, 4)

    with pytest.raises(ValueError):
        circuit1.evaluate({"x": 2})


def test_layered_circuit_wire_label(layered_circuit_data):
    circuit1, _, circuit3 = layered_circuit_data

    assert circuit1.get_wire_label() == [["zz"], ["z"], ["x", "y"]]
    assert circuit3.get_wire_label() == [
        ["c1", "c2"],
        ["b1", "b2", "b3", "b4"],
        ["a1", "a2", "a3", "a4"],
    ]


def test_layered_circuit_invalid_gates():

    circuit = LayeredCircuit(["x", "y"])
    circuit.add("x", "y", "z")

    with pytest.raises(ValueError):
        circuit.add("x", "y", "z")

    with pytest.raises(ValueError):
        circuit.add_gate("SUB", "x", "y", "w")

    circuit.add_layer()

    # only outputs of the previous layer may be read
    with pytest.raises(ValueError):
        circuit.mul("x", "z", "w")

    with pytest.raises(ValueError):
        circuit.mul("z", "z", "x")

    with pytest.raises(EmptyCircuit):
        LayeredCircuit(["x"]).compile()
