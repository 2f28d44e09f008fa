"""
snarkjs-compatible JSON interchange

Proofs, verification keys and public inputs are exchanged as JSON objects
with every big integer written as a decimal string:

    {"pi_a": [x, y, "1"],
     "pi_b": [[x_c0, x_c1], [y_c0, y_c1], ["1", "0"]],
     "pi_c": [x, y, "1"],
     "protocol": "groth16", "curve": "bn128"}

Wire bytes keep G2 coordinates in (c1, c0) order, so conversion swaps them.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from .codec import encode_compressed_proof
from .types import G1_LEN, G2_LEN, Proof, ProofFormatError, PublicInputs, VerificationKey

PROTOCOL = "groth16"
CURVE = "bn128"


def _parse_int(value: Union[str, int], what: str) -> int:
    try:
        parsed = int(str(value), 10)
    except ValueError as e:
        raise ProofFormatError(f"Failed to parse {what}") from e
    if parsed < 0 or parsed.bit_length() > 256:
        raise ProofFormatError(f"Failed to parse {what}")
    return parsed


def _word(value: int) -> bytes:
    return value.to_bytes(32, "big")


def convert_g1(values: Sequence[Union[str, int]]) -> bytes:
    if len(values) != 3:
        raise ProofFormatError(f"Invalid G1 point: expected 3 values, got {len(values)}")
    x = _parse_int(values[0], "G1 x coordinate")
    y = _parse_int(values[1], "G1 y coordinate")
    z = _parse_int(values[2], "G1 z coordinate")
    if z != 1:
        raise ProofFormatError(f"Invalid G1 point: Z coordinate is not 1 (found {z})")
    return _word(x) + _word(y)


def convert_g2(values: Sequence[Sequence[Union[str, int]]]) -> bytes:
    if len(values) != 3 or any(len(pair) != 2 for pair in values):
        raise ProofFormatError("Invalid G2 point structure")
    x_c0 = _parse_int(values[0][0], "G2 x.c0")
    x_c1 = _parse_int(values[0][1], "G2 x.c1")
    y_c0 = _parse_int(values[1][0], "G2 y.c0")
    y_c1 = _parse_int(values[1][1], "G2 y.c1")
    z_c0 = _parse_int(values[2][0], "G2 z.c0")
    z_c1 = _parse_int(values[2][1], "G2 z.c1")
    if z_c0 != 1 or z_c1 != 0:
        raise ProofFormatError(
            f"Invalid G2 point: Z coordinate is not [1, 0] (found [{z_c0}, {z_c1}])"
        )
    return _word(x_c1) + _word(x_c0) + _word(y_c1) + _word(y_c0)


def export_g1(point: bytes) -> List[str]:
    if len(point) != G1_LEN:
        raise ProofFormatError(f"G1 point must be {G1_LEN} bytes, got {len(point)}")
    x = int.from_bytes(point[:32], "big")
    y = int.from_bytes(point[32:], "big")
    return [str(x), str(y), "1"]


def export_g2(point: bytes) -> List[List[str]]:
    if len(point) != G2_LEN:
        raise ProofFormatError(f"G2 point must be {G2_LEN} bytes, got {len(point)}")
    x_c1, x_c0, y_c1, y_c0 = (int.from_bytes(point[i:i + 32], "big") for i in range(0, 128, 32))
    return [
        [str(x_c0), str(x_c1)],
        [str(y_c0), str(y_c1)],
        ["1", "0"],
    ]


def _field(data: Dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError as e:
        raise ProofFormatError(f"Missing field: {key}") from e


def load_proof(data: Dict[str, Any]) -> Proof:
    """Parse a proof object; pi_a is taken as-is (not negated)"""
    return Proof(
        pi_a=convert_g1(_field(data, "pi_a")),
        pi_b=convert_g2(_field(data, "pi_b")),
        pi_c=convert_g1(_field(data, "pi_c")),
    )


def export_proof(proof: Proof) -> Dict[str, Any]:
    return {
        "pi_a": export_g1(proof.pi_a),
        "pi_b": export_g2(proof.pi_b),
        "pi_c": export_g1(proof.pi_c),
        "protocol": PROTOCOL,
        "curve": CURVE,
    }


def load_verification_key(data: Dict[str, Any]) -> VerificationKey:
    nr_pubinputs = _parse_int(_field(data, "nPublic"), "nPublic")
    return VerificationKey(
        nr_pubinputs=nr_pubinputs,
        alpha_g1=convert_g1(_field(data, "vk_alpha_1")),
        beta_g2=convert_g2(_field(data, "vk_beta_2")),
        gamma_g2=convert_g2(_field(data, "vk_gamma_2")),
        delta_g2=convert_g2(_field(data, "vk_delta_2")),
        ic=tuple(convert_g1(point) for point in _field(data, "IC")),
    )


def export_verification_key(vk: VerificationKey) -> Dict[str, Any]:
    return {
        "protocol": PROTOCOL,
        "curve": CURVE,
        "nPublic": vk.nr_pubinputs,
        "vk_alpha_1": export_g1(vk.alpha_g1),
        "vk_beta_2": export_g2(vk.beta_g2),
        "vk_gamma_2": export_g2(vk.gamma_g2),
        "vk_delta_2": export_g2(vk.delta_g2),
        "IC": [export_g1(point) for point in vk.ic],
    }


def load_public_inputs(values: Sequence[Union[str, int]], count: int) -> PublicInputs:
    if len(values) != count:
        raise ProofFormatError("Invalid number of public inputs")
    return PublicInputs(tuple(_word(_parse_int(v, f"input {v}")) for v in values))


def export_public_inputs(public: PublicInputs) -> List[str]:
    return [str(int.from_bytes(value, "big")) for value in public.inputs]


def read_json(path: Union[str, Path]) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_compressed_proof(path: Union[str, Path], proof: Proof) -> None:
    """Write the 128-byte compressed A || B || C triple to ``path``"""
    Path(path).write_bytes(encode_compressed_proof(proof))
