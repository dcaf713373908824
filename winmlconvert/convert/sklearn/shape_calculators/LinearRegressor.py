# SPDX-License-Identifier: Apache-2.0

from ...common._registration import register_shape_calculator
from ...common.data_types import FloatTensorType
from ...common.shape_calculator import (
    calculate_linear_regressor_output_shapes,
    check_input_and_output_types,
)


def calculate_sklearn_linear_regressor_output_shapes(operator):
    check_input_and_output_types(operator, good_input_types=[FloatTensorType])
    calculate_linear_regressor_output_shapes(operator)


register_shape_calculator(
    "SklearnLinearRegressor", calculate_sklearn_linear_regressor_output_shapes
)
