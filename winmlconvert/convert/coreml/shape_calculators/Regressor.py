# SPDX-License-Identifier: Apache-2.0

from ...common._registration import register_shape_calculator
from ...common.data_types import FloatTensorType, FloatType, Int64TensorType, Int64Type
from ...common.shape_calculator import (
    check_input_and_output_numbers,
    check_input_and_output_types,
)


def calculate_traditional_regressor_output_shapes(operator):
    """
    Allowed input/output patterns are
        1. [N, C] ---> [N, C']

    The number C' is the length of prediction vector.
    It can be a scalar (C'=1) or a vector (C'>1)
    """
    check_input_and_output_numbers(operator, input_count_range=1, output_count_range=1)
    check_input_and_output_types(
        operator,
        good_input_types=[FloatTensorType, Int64TensorType, FloatType, Int64Type],
    )

    if any(len(variable.type.shape) != 2 for variable in operator.inputs):
        raise RuntimeError("Input(s) must be 2-D tensor(s)")

    model_type = operator.raw_operator.WhichOneof("Type")
    if model_type == "glmRegressor":
        C = len(operator.raw_operator.glmRegressor.weights)
    else:
        raise ValueError("Model should be a linear model, got %s" % model_type)

    N = operator.inputs[0].type.shape[0]
    operator.outputs[0].type = FloatTensorType(
        [N, C], doc_string=operator.outputs[0].type.doc_string
    )


register_shape_calculator("glmRegressor", calculate_traditional_regressor_output_shapes)
