# SPDX-License-Identifier: Apache-2.0

from onnx.defs import onnx_opset_version

DEFAULT_OPSET_NUMBER = 15

# IR version required by each main opset.
OPSET_TO_IR_VERSION = {
    1: 3,
    2: 3,
    3: 3,
    4: 3,
    5: 3,
    6: 3,
    7: 3,
    8: 4,
    9: 4,
    10: 5,
    11: 6,
    12: 7,
    13: 7,
    14: 7,
    15: 8,
    16: 8,
    17: 8,
    18: 8,
    19: 9,
    20: 9,
    21: 10,
    22: 10,
    23: 10,
    24: 10,
}


def get_maximum_opset_supported():
    """
    Returns the highest main opset the converters produce with the
    installed onnx package.
    """
    return min(onnx_opset_version(), DEFAULT_OPSET_NUMBER)


def resolve_target_opset(target_opset):
    """
    Replaces a missing *target_opset* with the maximum supported one
    and rejects values the installed onnx cannot handle.
    """
    opset_from_onnx_version = onnx_opset_version()
    if target_opset is None:
        return get_maximum_opset_supported()
    if target_opset > opset_from_onnx_version:
        raise RuntimeError(
            "target_opset %d is higher than the opset supported by the "
            "installed onnx package (%d)." % (target_opset, opset_from_onnx_version)
        )
    return target_opset
