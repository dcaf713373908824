# SPDX-License-Identifier: Apache-2.0

from ....common._apply_operation import (
    apply_affine,
    apply_leaky_relu,
    apply_relu,
    apply_sigmoid,
    apply_tanh,
)
from ....common._registration import register_converter

# Activations without parameters.
_PLAIN_ACTIVATIONS = {
    "ReLU": apply_relu,
    "sigmoid": apply_sigmoid,
    "tanh": apply_tanh,
}

# CoreML activation -> (ONNX operator, opset it requires, parameters
# copied from the layer as attributes).
_PARAMETRIZED_ACTIVATIONS = {
    "ELU": ("Elu", 6, ("alpha",)),
    "thresholdedReLU": ("ThresholdedRelu", 10, ("alpha",)),
    "sigmoidHard": ("HardSigmoid", 6, ("alpha", "beta")),
    "softsign": ("Softsign", 1, ()),
    "softplus": ("Softplus", 1, ()),
}


def convert_activation(scope, operator, container):
    """
    Converts a CoreML activation layer into the ONNX operator
    computing the same function, linear becomes a Mul and an Add.
    """
    input_name = operator.inputs[0].full_name
    output_name = operator.outputs[0].full_name
    name = operator.full_name

    params = operator.raw_operator.activation
    kind = params.WhichOneof("NonlinearityType")

    if kind in _PLAIN_ACTIVATIONS:
        _PLAIN_ACTIVATIONS[kind](
            scope, input_name, output_name, container, operator_name=name
        )
    elif kind == "leakyReLU":
        apply_leaky_relu(
            scope,
            input_name,
            output_name,
            container,
            operator_name=name,
            alpha=params.leakyReLU.alpha,
        )
    elif kind == "linear":
        apply_affine(
            scope,
            input_name,
            output_name,
            container,
            operator_name=name,
            alpha=params.linear.alpha,
            beta=params.linear.beta,
        )
    elif kind in _PARAMETRIZED_ACTIVATIONS:
        op_type, op_version, attr_names = _PARAMETRIZED_ACTIVATIONS[kind]
        layer_params = getattr(params, kind)
        attrs = {a: float(getattr(layer_params, a)) for a in attr_names}
        container.add_node(
            op_type, input_name, output_name, op_version=op_version, name=name, **attrs
        )
    else:
        raise TypeError("Unsupported activation layer {0}".format(kind))


register_converter("activation", convert_activation)
