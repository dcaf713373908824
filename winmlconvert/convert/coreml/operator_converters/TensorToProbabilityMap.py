# SPDX-License-Identifier: Apache-2.0

import numbers
from onnx import TensorProto
from ...common._apply_operation import apply_reshape
from ...common._registration import register_converter
from .TensorToLabel import get_class_labels


def convert_tensor_to_probability_map(scope, operator, container):
    """
    Converts the special operator 'tensorToProbabilityMap' into a
    ZipMap building one dictionary per row, keys are class labels
    and values the associated probabilities.
    """
    attrs = {"name": scope.get_unique_operator_name("ZipMap")}
    labels, label_type = get_class_labels(operator.raw_operator)
    if label_type == TensorProto.STRING:
        attrs["classlabels_strings"] = labels
    else:
        attrs["classlabels_int64s"] = labels

    input_shape = operator.inputs[0].type.shape
    if len(input_shape) != 2:
        # ZipMap in ONNX only accepts [C] and [N, C] inputs. In cases of [N, C, 1, 1], we reshape the probability tensor
        # into [N, C] before feeding it into ZipMap.
        if all(isinstance(i, numbers.Integral) for i in input_shape[1:]):
            C = 1
            for i in input_shape[1:]:
                C *= int(i)
        else:
            C = len(labels)
        buffer_name = scope.get_unique_variable_name("buffer")
        apply_reshape(
            scope,
            operator.inputs[0].full_name,
            buffer_name,
            container,
            desired_shape=[-1, C],
        )
    else:
        buffer_name = operator.inputs[0].full_name

    container.add_node(
        "ZipMap",
        buffer_name,
        operator.outputs[0].full_name,
        op_domain="ai.onnx.ml",
        **attrs
    )


register_converter("tensorToProbabilityMap", convert_tensor_to_probability_map)
