# SPDX-License-Identifier: Apache-2.0

from ...common._apply_operation import apply_cast, apply_concat
from ...common._registration import register_converter
from ...common.data_types import guess_proto_type


def convert_sklearn_concat(scope, operator, container):
    """
    Casts every input into the element type of the output and
    concatenates them along the feature axis, in declaration order.
    """
    output = operator.outputs[0]
    proto_type = guess_proto_type(output.type)
    input_names = []
    for variable in operator.inputs:
        if guess_proto_type(variable.type) == proto_type:
            input_names.append(variable.full_name)
            continue
        cast_name = scope.get_unique_variable_name(variable.full_name + "_cast")
        apply_cast(scope, variable.full_name, cast_name, container, to=proto_type)
        input_names.append(cast_name)

    apply_concat(scope, input_names, output.full_name, container, axis=1)


register_converter("SklearnConcat", convert_sklearn_concat)
