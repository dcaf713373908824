# SPDX-License-Identifier: Apache-2.0

from ...common._registration import register_shape_calculator
from ...common.data_types import (
    DictionaryType,
    FloatTensorType,
    Int64TensorType,
    SequenceType,
    StringTensorType,
)
from ...common.shape_calculator import (
    check_input_and_output_numbers,
    check_input_and_output_types,
)


def calculate_tensor_to_probability_map_output_shapes(operator):
    """
    Allowed input/output patterns are
        1. [N, C] ---> A sequence of maps
        2. [N, C_1, ..., C_n] ---> A sequence of maps

    If the input is not [N, C], it will be reshaped into
    [N, C_1 x C_2, x ... x C_n] before being fed into ONNX ZipMap.
    """
    check_input_and_output_numbers(operator, input_count_range=1, output_count_range=1)
    check_input_and_output_types(operator, good_input_types=[FloatTensorType])

    model_type = operator.raw_operator.WhichOneof("Type")
    if model_type == "neuralNetworkClassifier":
        class_label_type = operator.raw_operator.neuralNetworkClassifier.WhichOneof(
            "ClassLabels"
        )
    else:
        raise TypeError("%s has no class label" % model_type)

    doc_string = operator.outputs[0].type.doc_string
    if class_label_type == "stringClassLabels":
        key_type = StringTensorType([])
    elif class_label_type == "int64ClassLabels":
        key_type = Int64TensorType([])
    else:
        raise ValueError("Unsupported label type")
    operator.outputs[0].type = SequenceType(
        DictionaryType(key_type, FloatTensorType([])), doc_string=doc_string
    )


register_shape_calculator(
    "tensorToProbabilityMap", calculate_tensor_to_probability_map_output_shapes
)
