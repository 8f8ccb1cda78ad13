BN254_SCALAR_FIELD = 21888242871839275222246405745257275088548364400416034343698204186575808495617
BLS12_381_SCALAR_FIELD = 52435875175126190479447740508185965837690552500527637822603658699938581184513
