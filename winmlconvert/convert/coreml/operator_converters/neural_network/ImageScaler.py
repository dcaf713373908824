# SPDX-License-Identifier: Apache-2.0

from onnx import TensorProto
from ....common._apply_operation import apply_add, apply_mul
from ....common._registration import register_converter


def convert_preprocessing_scaler(scope, operator, container):
    params = operator.raw_operator.scaler
    # The scale parameter in CoreML is always a scalar, ONNX broadcasts it to all channels.

    color_space = operator.inputs[0].type.color_space
    if color_space == "Gray8":
        bias = [params.grayBias]
    elif color_space == "Rgb8":
        bias = [params.redBias, params.greenBias, params.blueBias]
    elif color_space == "Bgr8":
        bias = [params.blueBias, params.greenBias, params.redBias]
    else:
        raise ValueError(
            "Unknown color space for tensor {}".format(operator.inputs[0].full_name)
        )

    # In comments below, assume input tensor is X, the scale scalar is a, the bias vector is b.

    # Store the scalar, a, used to scale all elements in the input tensor.
    a_name = scope.get_unique_variable_name(operator.full_name + "_scale")
    container.add_initializer(a_name, TensorProto.FLOAT, [1], [params.channelScale])

    # Store the bias vector. It will be added into the input tensor.
    b_name = scope.get_unique_variable_name(operator.full_name + "_bias")
    container.add_initializer(b_name, TensorProto.FLOAT, [len(bias), 1, 1], bias)

    # Compute Z = a * X.
    z_name = scope.get_unique_variable_name(operator.full_name + "_scaled")
    apply_mul(scope, [operator.input_full_names[0], a_name], z_name, container)

    # Compute Y = Z + b, which is the final output.
    apply_add(scope, [b_name, z_name], operator.output_full_names[0], container)


register_converter("scalerPreprocessor", convert_preprocessing_scaler)
