# SPDX-License-Identifier: Apache-2.0

from ....exceptions import UnsupportedFeatureType
from ...common._registration import register_shape_calculator
from ...common.data_types import NUMERIC_TENSOR_TYPES
from ...common.schema import feature_width
from ...common.shape_calculator import check_input_and_output_numbers


def calculate_sklearn_concat(operator):
    """
    Allowed input/output patterns are
        1. [N, C1], ..., [N, Ck] ---> [N, C1 + ... + Ck]

    Every input is cast into the element type of the output
    before being concatenated along the feature axis.
    """
    check_input_and_output_numbers(operator, input_count_range=[1, None], output_count_range=1)

    for variable in operator.inputs:
        if not isinstance(variable.type, NUMERIC_TENSOR_TYPES):
            raise UnsupportedFeatureType(
                "Input '%s' of type %s cannot be combined with the other "
                "features into a numeric tensor, only %s are allowed."
                % (
                    variable.raw_name,
                    type(variable.type).__name__,
                    [t.__name__ for t in NUMERIC_TENSOR_TYPES],
                )
            )

    C = 0
    for variable in operator.inputs:
        width = feature_width(variable.type)
        if width is None:
            C = None
            break
        C += width

    N = operator.inputs[0].type.shape[0]
    operator.outputs[0].type.shape = [N, C]


register_shape_calculator("SklearnConcat", calculate_sklearn_concat)
