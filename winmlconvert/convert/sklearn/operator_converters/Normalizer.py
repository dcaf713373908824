# SPDX-License-Identifier: Apache-2.0

import numpy as np
from onnx import TensorProto
from ...common._apply_operation import apply_abs, apply_div
from ...common._registration import register_converter


def _convert_max_norm(scope, operator, container):
    """
    scikit-learn divides every row by its maximum absolute value
    while ONNX Normalizer(MAX) uses the maximum. A null row is
    left unchanged, the norm is bounded below by the smallest
    positive float.
    """
    input_name = operator.inputs[0].full_name
    abs_name = scope.get_unique_variable_name("abs_input")
    apply_abs(scope, input_name, abs_name, container)

    norm_name = scope.get_unique_variable_name("max_abs")
    container.add_node(
        "ReduceMax",
        abs_name,
        norm_name,
        op_version=1,
        name=scope.get_unique_operator_name("ReduceMax"),
        axes=[1],
        keepdims=1,
    )

    tiny_name = scope.get_unique_variable_name("tiny")
    container.add_initializer(
        tiny_name, TensorProto.FLOAT, [], [float(np.finfo(np.float32).tiny)]
    )
    safe_norm_name = scope.get_unique_variable_name("max_abs_safe")
    container.add_node(
        "Max",
        [norm_name, tiny_name],
        safe_norm_name,
        op_version=8,
        name=scope.get_unique_operator_name("Max"),
    )
    apply_div(
        scope, [input_name, safe_norm_name], operator.outputs[0].full_name, container
    )


def convert_sklearn_normalizer(scope, operator, container):
    op = operator.raw_operator
    if op.norm == "max":
        _convert_max_norm(scope, operator, container)
        return

    norm_map = {"l1": "L1", "l2": "L2"}
    if op.norm not in norm_map:
        raise RuntimeError(
            "Invalid norm '%s', expected one of %s."
            % (op.norm, sorted(norm_map) + ["max"])
        )

    op_type = "Normalizer"
    attrs = {"name": scope.get_unique_operator_name(op_type), "norm": norm_map[op.norm]}
    container.add_node(
        op_type,
        operator.input_full_names,
        operator.output_full_names,
        op_domain="ai.onnx.ml",
        **attrs
    )


register_converter("SklearnNormalizer", convert_sklearn_normalizer)
