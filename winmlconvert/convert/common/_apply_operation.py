# SPDX-License-Identifier: Apache-2.0
import onnx


def _create_name_or_use_existing_one(scope, op_type, name):
    if name is None:
        return scope.get_unique_operator_name(op_type)
    return name


def _apply_basic_numerical_operation(
    scope, op_type, input_names, output_name, container, operator_name
):
    name = _create_name_or_use_existing_one(scope, op_type, operator_name)
    # Numpy-like broadcasting, available since opset 7.
    container.add_node(op_type, input_names, output_name, op_version=7, name=name)


def apply_add(scope, input_names, output_name, container, operator_name=None):
    _apply_basic_numerical_operation(
        scope, "Add", input_names, output_name, container, operator_name
    )


def apply_sub(scope, input_names, output_name, container, operator_name=None):
    _apply_basic_numerical_operation(
        scope, "Sub", input_names, output_name, container, operator_name
    )


def apply_mul(scope, input_names, output_name, container, operator_name=None):
    _apply_basic_numerical_operation(
        scope, "Mul", input_names, output_name, container, operator_name
    )


def apply_matmul(scope, input_names, output_name, container, operator_name=None):
    name = _create_name_or_use_existing_one(scope, "MatMul", operator_name)
    container.add_node("MatMul", input_names, output_name, op_version=9, name=name)


def apply_concat(
    scope, input_names, output_name, container, operator_name=None, axis=0
):
    name = _create_name_or_use_existing_one(scope, "Concat", operator_name)
    container.add_node(
        "Concat", input_names, output_name, op_version=4, name=name, axis=axis
    )


def apply_reshape(
    scope, input_name, output_name, container, operator_name=None, desired_shape=None
):
    if len([i for i in desired_shape if i is not None and i < 0]) > 1:
        raise ValueError(
            "There can only be one -1 in the targeted shape of a Reshape but got %s"
            % desired_shape
        )

    name = _create_name_or_use_existing_one(scope, "Reshape", operator_name)
    desired_shape_name = scope.get_unique_variable_name("shape_tensor")
    container.add_initializer(
        desired_shape_name,
        onnx.TensorProto.INT64,
        [len(desired_shape)],
        [-1 if d is None else d for d in desired_shape],
    )
    container.add_node(
        "Reshape", [input_name, desired_shape_name], output_name, op_version=5, name=name
    )


def apply_cast(scope, input_name, output_name, container, operator_name=None, to=None):
    """
    :param to: enum defined in ONNX TensorProto.DataType, for example, TensorProto.FLOAT and TensorProto.INT64.
    """
    name = _create_name_or_use_existing_one(scope, "Cast", operator_name)

    allowed = set(v.number for v in onnx.TensorProto.DataType.DESCRIPTOR.values)
    if to not in allowed:
        raise ValueError('Attribute "to" must be one of %s' % sorted(allowed))
    if to in (onnx.TensorProto.COMPLEX64, onnx.TensorProto.COMPLEX128):
        raise ValueError(
            'Attribute "to" cannot correspond to a Complex TensorProto type.'
        )

    # Casting from or to strings requires opset 9.
    op_version = 9 if container.target_opset >= 9 else 6
    container.add_node("Cast", input_name, output_name, op_version=op_version, name=name, to=to)


def apply_identity(scope, input_name, output_name, container, operator_name=None):
    name = _create_name_or_use_existing_one(scope, "Identity", operator_name)
    container.add_node("Identity", input_name, output_name, name=name)


def _apply_unary_operation(
    scope, op_type, input_name, output_name, container, operator_name, **attrs
):
    name = _create_name_or_use_existing_one(scope, op_type, operator_name)
    # Version 6 removed the attribute *consumed_inputs*.
    container.add_node(op_type, input_name, output_name, op_version=6, name=name, **attrs)


def apply_relu(scope, input_name, output_name, container, operator_name=None):
    _apply_unary_operation(scope, "Relu", input_name, output_name, container, operator_name)


def apply_sigmoid(scope, input_name, output_name, container, operator_name=None):
    _apply_unary_operation(
        scope, "Sigmoid", input_name, output_name, container, operator_name
    )


def apply_tanh(scope, input_name, output_name, container, operator_name=None):
    _apply_unary_operation(scope, "Tanh", input_name, output_name, container, operator_name)


def apply_leaky_relu(
    scope, input_name, output_name, container, operator_name=None, alpha=None
):
    _apply_unary_operation(
        scope,
        "LeakyRelu",
        input_name,
        output_name,
        container,
        operator_name,
        alpha=alpha,
    )


def apply_affine(
    scope, input_name, output_name, container, operator_name=None, alpha=1.0, beta=0.0
):
    """
    Computes alpha * X + beta with a Mul followed by an Add.
    """
    name = _create_name_or_use_existing_one(scope, "Affine", operator_name)
    alpha_name = scope.get_unique_variable_name(name + "_alpha")
    beta_name = scope.get_unique_variable_name(name + "_beta")
    container.add_initializer(alpha_name, onnx.TensorProto.FLOAT, [], [alpha])
    container.add_initializer(beta_name, onnx.TensorProto.FLOAT, [], [beta])

    scaled_name = scope.get_unique_variable_name(name + "_scaled")
    apply_mul(scope, [input_name, alpha_name], scaled_name, container)
    apply_add(scope, [scaled_name, beta_name], output_name, container)


def apply_transpose(
    scope, input_name, output_name, container, operator_name=None, perm=None
):
    name = _create_name_or_use_existing_one(scope, "Transpose", operator_name)
    container.add_node("Transpose", input_name, output_name, name=name, perm=perm)


def apply_div(scope, input_names, output_name, container, operator_name=None):
    _apply_basic_numerical_operation(
        scope, "Div", input_names, output_name, container, operator_name
    )


def apply_abs(scope, input_name, output_name, container, operator_name=None):
    _apply_unary_operation(scope, "Abs", input_name, output_name, container, operator_name)


def apply_clip(
    scope, input_name, output_name, container, operator_name=None, min=None, max=None
):
    """
    Bounds are attributes before opset 11 and optional scalar
    inputs afterwards.
    """
    name = _create_name_or_use_existing_one(scope, "Clip", operator_name)
    if container.target_opset < 11:
        attrs = {"name": name}
        if min is not None:
            attrs["min"] = float(min)
        if max is not None:
            attrs["max"] = float(max)
        container.add_node("Clip", input_name, output_name, op_version=6, **attrs)
        return

    inputs = [input_name]
    for bound, label in ((min, "min"), (max, "max")):
        if bound is None:
            inputs.append("")
            continue
        bound_name = scope.get_unique_variable_name(name + "_" + label)
        container.add_initializer(bound_name, onnx.TensorProto.FLOAT, [], [float(bound)])
        inputs.append(bound_name)
    # Trailing empty inputs are dropped.
    while inputs[-1] == "":
        inputs.pop()
    container.add_node("Clip", inputs, output_name, op_version=11, name=name)
