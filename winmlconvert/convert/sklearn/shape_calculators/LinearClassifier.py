# SPDX-License-Identifier: Apache-2.0

import numbers
import numpy as np
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


def calculate_linear_classifier_output_shapes(operator):
    """
    This operator maps an input feature vector into a label and the
    scores of every class.

    Allowed input/output patterns are
        1. [N, C] ---> [N], a sequence of maps (ZipMap)
        2. [N, C] ---> [N], [N, K] (no ZipMap)

    K is the number of classes.
    """
    check_input_and_output_numbers(operator, input_count_range=1, output_count_range=2)
    check_input_and_output_types(operator, good_input_types=[FloatTensorType])

    if len(operator.inputs[0].type.shape) != 2:
        raise RuntimeError("Input must be a [N, C]-tensor")

    N = operator.inputs[0].type.shape[0]
    class_labels = operator.raw_operator.classes_
    if all(isinstance(i, str) for i in class_labels):
        label_type = StringTensorType
    elif all(isinstance(i, (numbers.Real, bool, np.bool_)) for i in class_labels):
        label_type = Int64TensorType
    else:
        raise ValueError("Label types must be all integers or all strings.")

    operator.outputs[0].type = label_type(shape=[N])
    if isinstance(operator.outputs[1].type, SequenceType):
        operator.outputs[1].type = SequenceType(
            DictionaryType(label_type([]), FloatTensorType([]))
        )
    else:
        operator.outputs[1].type = FloatTensorType([N, len(class_labels)])


register_shape_calculator("SklearnLinearClassifier", calculate_linear_classifier_output_shapes)
register_shape_calculator("SklearnLinearSVC", calculate_linear_classifier_output_shapes)
