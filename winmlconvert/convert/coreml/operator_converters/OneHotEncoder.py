# SPDX-License-Identifier: Apache-2.0

from ...common._apply_operation import apply_reshape
from ...common._registration import register_converter


def convert_one_hot_encoder(scope, operator, container):
    op_type = "OneHotEncoder"
    attrs = {"name": operator.full_name}

    raw_model = operator.raw_operator.oneHotEncoder
    if raw_model.HasField("int64Categories"):
        attrs["cats_int64s"] = list(int(i) for i in raw_model.int64Categories.vector)
        C = len(attrs["cats_int64s"])
    if raw_model.HasField("stringCategories"):
        attrs["cats_strings"] = list(str(s) for s in raw_model.stringCategories.vector)
        C = len(attrs["cats_strings"])

    # ONNX OneHotEncoder appends the category axis, [N, 1] becomes [N, 1, C].
    encoded_name = scope.get_unique_variable_name(operator.full_name + "_encoded")
    container.add_node(
        op_type,
        [operator.inputs[0].full_name],
        [encoded_name],
        op_domain="ai.onnx.ml",
        **attrs
    )
    apply_reshape(
        scope,
        encoded_name,
        operator.outputs[0].full_name,
        container,
        desired_shape=[-1, C],
    )


register_converter("oneHotEncoder", convert_one_hot_encoder)
