# SPDX-License-Identifier: Apache-2.0

import copy
from ...common._registration import register_shape_calculator
from ...common.data_types import FloatTensorType
from ...common.shape_calculator import (
    check_input_and_output_numbers,
    check_input_and_output_types,
)


def calculate_sklearn_scaler_output_shapes(operator):
    """
    Allowed input/output patterns are
        1. [N, C] ---> [N, C]

    The operators registered with this function only change
    the values of the features, not their number.
    """
    check_input_and_output_numbers(operator, input_count_range=1, output_count_range=1)
    check_input_and_output_types(operator, good_input_types=[FloatTensorType])

    input_shape = copy.deepcopy(operator.inputs[0].type.shape)
    operator.outputs[0].type = FloatTensorType(input_shape)


register_shape_calculator("SklearnScaler", calculate_sklearn_scaler_output_shapes)
register_shape_calculator("SklearnRobustScaler", calculate_sklearn_scaler_output_shapes)
register_shape_calculator("SklearnMinMaxScaler", calculate_sklearn_scaler_output_shapes)
register_shape_calculator("SklearnMaxAbsScaler", calculate_sklearn_scaler_output_shapes)
register_shape_calculator("SklearnNormalizer", calculate_sklearn_scaler_output_shapes)
register_shape_calculator("SklearnBinarizer", calculate_sklearn_scaler_output_shapes)
