from zkprim.arithmetization import LayeredCircuit
from zkprim.arithmetization.wiring import wiring_point
from zkprim.constant import BN254_SCALAR_FIELD
from zkprim.transcript import FiatShamirTranscript
from zkprim.utils import log2_ceil

# out = (a + b) * (c * d)
builder = LayeredCircuit(["a", "b", "c", "d"])
builder.add("a", "b", "s")
builder.mul("c", "d", "m")
builder.add_layer()
builder.mul("s", "m", "out")

circuit = builder.compile()
evaluation = circuit.evaluate([2, 3, 4, 5], BN254_SCALAR_FIELD)
print("trace:", evaluation.to_list())

for i, layer in enumerate(circuit.layers):
    add_i, mul_i = circuit.get_add_and_mul_mle(i, BN254_SCALAR_FIELD)
    m = log2_ceil(len(layer))
    n = log2_ceil(circuit.next_layer_size(i))
    print(f"layer {i}: {add_i.num_vars} variables (m={m}, n={n})")

    for gate_index, gate in enumerate(layer):
        point = wiring_point(gate_index, *gate.inputs, m, n)
        print(
            f"  gate {gate_index} {gate.gate_type.value} {gate.inputs}:",
            f"add_i={add_i.evaluate(point)} mul_i={mul_i.evaluate(point)}",
        )

    # query the predicates off the hypercube, as a GKR verifier would
    transcript = FiatShamirTranscript(b"wiring")
    transcript.append(list(evaluation[i + 1]))
    r = [transcript.get_challenge_scalar(BN254_SCALAR_FIELD) for _ in range(add_i.num_vars)]
    print(f"  add_i(r) = {add_i.evaluate(r)}")
    print(f"  mul_i(r) = {mul_i.evaluate(r)}")
