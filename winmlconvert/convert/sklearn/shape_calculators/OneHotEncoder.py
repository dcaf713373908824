# SPDX-License-Identifier: Apache-2.0

from ...common._registration import register_shape_calculator
from ...common.data_types import FloatTensorType, Int64TensorType
from ...common.shape_calculator import (
    check_input_and_output_numbers,
    check_input_and_output_types,
)


def calculate_sklearn_one_hot_encoder_output_shapes(operator):
    """
    Allowed input/output patterns are
        1. [N, C] ---> [N, K]

    K is the total number of categories over all the columns.
    """
    check_input_and_output_numbers(operator, input_count_range=1, output_count_range=1)
    check_input_and_output_types(operator, good_input_types=[Int64TensorType])

    N = operator.inputs[0].type.shape[0]
    K = sum(len(cats) for cats in operator.raw_operator.categories_)
    operator.outputs[0].type = FloatTensorType([N, K])


register_shape_calculator(
    "SklearnOneHotEncoder", calculate_sklearn_one_hot_encoder_output_shapes
)
