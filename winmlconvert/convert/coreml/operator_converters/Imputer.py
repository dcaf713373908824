# SPDX-License-Identifier: Apache-2.0

from ...common._registration import register_converter


def convert_imputer(scope, operator, container):
    op_type = "Imputer"
    attrs = {"name": operator.full_name}
    imputer = operator.raw_operator.imputer
    if imputer.WhichOneof("ReplaceValue") == "replaceDoubleValue":
        attrs["replaced_value_float"] = imputer.replaceDoubleValue
    elif imputer.WhichOneof("ReplaceValue") == "replaceInt64Value":
        attrs["replaced_value_int64"] = imputer.replaceInt64Value

    imputed = imputer.WhichOneof("ImputedValue")
    if imputed == "imputedDoubleValue":
        attrs["imputed_value_floats"] = [imputer.imputedDoubleValue]
    elif imputed == "imputedInt64Value":
        attrs["imputed_value_int64s"] = [imputer.imputedInt64Value]
    elif imputed == "imputedDoubleArray":
        attrs["imputed_value_floats"] = list(imputer.imputedDoubleArray.vector)
    elif imputed == "imputedInt64Array":
        attrs["imputed_value_int64s"] = list(imputer.imputedInt64Array.vector)
    else:
        raise ValueError("Unsupported imputed value: %r" % imputed)

    container.add_node(
        op_type,
        operator.input_full_names,
        operator.output_full_names,
        op_domain="ai.onnx.ml",
        **attrs
    )


register_converter("imputer", convert_imputer)
