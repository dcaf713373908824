# SPDX-License-Identifier: Apache-2.0

from ...exceptions import MissingConverter

# Converters invoked by convert_topology, keyed by operator alias.
_converter_pool = {}
# Shape calculators invoked while compiling a Topology, keyed by operator alias.
_shape_calculator_pool = {}


def register_converter(operator_name, conversion_function, overwrite=False):
    """
    Register the function emitting ONNX nodes for operators of
    type *operator_name*. The function is called with
    ``(scope, operator, container)``.
    """
    if not overwrite and operator_name in _converter_pool:
        raise ValueError(
            "A converter is already registered for '%s', "
            "use overwrite=True to replace it." % operator_name
        )
    _converter_pool[operator_name] = conversion_function


def get_converter(operator_name):
    if operator_name not in _converter_pool:
        raise MissingConverter(
            "Unsupported conversion for operator '%s'." % operator_name
        )
    return _converter_pool[operator_name]


def register_shape_calculator(operator_name, calculator_function, overwrite=False):
    """
    Register the function filling the output types of operators of
    type *operator_name*. The function is called with ``(operator)``.
    """
    if not overwrite and operator_name in _shape_calculator_pool:
        raise ValueError(
            "A shape calculator is already registered for '%s', "
            "use overwrite=True to replace it." % operator_name
        )
    _shape_calculator_pool[operator_name] = calculator_function


def get_shape_calculator(operator_name):
    if operator_name not in _shape_calculator_pool:
        raise MissingConverter(
            "Unsupported shape calculation for operator '%s'." % operator_name
        )
    return _shape_calculator_pool[operator_name]
