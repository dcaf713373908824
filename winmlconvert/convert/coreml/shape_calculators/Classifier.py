# SPDX-License-Identifier: Apache-2.0

from ...common._registration import register_shape_calculator
from ...common.data_types import (
    DictionaryType,
    FloatTensorType,
    FloatType,
    Int64TensorType,
    Int64Type,
    SequenceType,
    StringTensorType,
)
from ...common.shape_calculator import (
    check_input_and_output_numbers,
    check_input_and_output_types,
)


def calculate_traditional_classifier_output_shapes(operator):
    """
    Allowed input/output patterns are
        1. [N, C] ---> [N], Sequence of Map
        2. [N, C] ---> [N]
    """
    check_input_and_output_numbers(operator, input_count_range=1, output_count_range=[1, 2])
    check_input_and_output_types(
        operator,
        good_input_types=[FloatTensorType, Int64TensorType, FloatType, Int64Type],
    )

    if any(len(variable.type.shape) != 2 for variable in operator.inputs):
        raise RuntimeError("Input(s) must be [N, C]-tensor(s)")

    model_type = operator.raw_operator.WhichOneof("Type")
    if model_type == "glmClassifier":
        class_label_type = operator.raw_operator.glmClassifier.WhichOneof("ClassLabels")
    else:
        raise ValueError("%s has no class label" % model_type)

    if class_label_type == "stringClassLabels":
        label_type = StringTensorType
    elif class_label_type == "int64ClassLabels":
        label_type = Int64TensorType
    else:
        raise ValueError("Traditional classifier must include label information")

    N = operator.inputs[0].type.shape[0]
    operator.outputs[0].type = label_type(
        [N], doc_string=operator.outputs[0].type.doc_string
    )
    if len(operator.outputs) == 2:
        operator.outputs[1].type = SequenceType(
            DictionaryType(label_type([]), FloatTensorType([])),
            doc_string=operator.outputs[1].type.doc_string,
        )


register_shape_calculator("glmClassifier", calculate_traditional_classifier_output_shapes)
