# SPDX-License-Identifier: Apache-2.0

from ...common._registration import register_shape_calculator
from ...common.data_types import (
    FloatTensorType,
    Int64TensorType,
    Int64Type,
    StringTensorType,
    StringType,
)
from ...common.shape_calculator import check_input_and_output_numbers


def calculate_one_hot_encoder_output_shapes(operator):
    """
    Allowed input/output patterns are
        1. [N, 1] ---> [N, C']

    C' is the total number of categorical values.
    """
    check_input_and_output_numbers(operator, input_count_range=1, output_count_range=1)

    input_type = operator.inputs[0].type
    if len(input_type.shape) != 2 or input_type.shape[1] != 1:
        raise RuntimeError("Input must be [N, 1]-tensor")

    int_categories = operator.raw_operator.oneHotEncoder.int64Categories.vector
    str_categories = operator.raw_operator.oneHotEncoder.stringCategories.vector

    N = input_type.shape[0]
    doc_string = operator.outputs[0].type.doc_string
    if len(int_categories) > 0 and isinstance(input_type, (Int64TensorType, Int64Type)):
        C = len(int_categories)
    elif len(str_categories) > 0 and isinstance(
        input_type, (StringTensorType, StringType)
    ):
        C = len(str_categories)
    else:
        raise ValueError(
            "Categorical indexes are missing or do not match the input type %s"
            % type(input_type).__name__
        )
    operator.outputs[0].type = FloatTensorType([N, C], doc_string=doc_string)


register_shape_calculator("oneHotEncoder", calculate_one_hot_encoder_output_shapes)
