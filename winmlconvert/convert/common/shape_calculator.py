# SPDX-License-Identifier: Apache-2.0

from ...exceptions import UnsupportedFeatureType
from .data_types import FloatTensorType


def _count_range(count_range, label):
    if isinstance(count_range, list):
        return count_range[0], count_range[1]
    if isinstance(count_range, int) or count_range is None:
        return count_range, count_range
    raise RuntimeError("%s must be a list or an integer" % label)


def check_input_and_output_numbers(
    operator, input_count_range=None, output_count_range=None
):
    """
    Check if the number of input(s)/output(s) is correct

    :param operator: A Operator object
    :param input_count_range: A list of two integers or an integer. If it's a list the first/second element is the
        minimal/maximal number of inputs. If it's an integer, it is equivalent to specify that number twice in a list.
        For infinite ranges like 5 to infinity, you need to use [5, None].
    :param output_count_range: A list of two integers or an integer. See input_count_range for its format.
    """
    checks = (
        ("input", operator.inputs, operator.input_full_names)
        + _count_range(input_count_range, "input_count_range"),
        ("output", operator.outputs, operator.output_full_names)
        + _count_range(output_count_range, "output_count_range"),
    )
    for kind, variables, names, min_count, max_count in checks:
        if min_count is not None and len(variables) < min_count:
            raise RuntimeError(
                "For operator %s (type: %s), at least %s %s(s) is(are) required "
                "but we got %s which are %s"
                % (operator.full_name, operator.type, min_count, kind, len(variables), names)
            )
        if max_count is not None and len(variables) > max_count:
            raise RuntimeError(
                "For operator %s (type: %s), at most %s %s(s) is(are) supported "
                "but we got %s which are %s"
                % (operator.full_name, operator.type, max_count, kind, len(variables), names)
            )


def check_input_and_output_types(
    operator, good_input_types=None, good_output_types=None
):
    """
    Raises UnsupportedFeatureType if a variable of the operator has
    a type the operator cannot handle.

    :param operator: A Operator object
    :param good_input_types: A list of allowed input types (e.g., [FloatTensorType, Int64TensorType]) or None. None
        means that we skip the check of the input types.
    :param good_output_types: A list of allowed output types. See good_input_types for its format.
    """
    for kind, variables, good_types in (
        ("input", operator.inputs, good_input_types),
        ("output", operator.outputs, good_output_types),
    ):
        if good_types is None:
            continue
        for variable in variables:
            if type(variable.type) not in good_types:
                raise UnsupportedFeatureType(
                    "Operator %s (type: %s) got an %s %s with a wrong type %s. "
                    "Only %s are allowed"
                    % (
                        operator.full_name,
                        operator.type,
                        kind,
                        variable.full_name,
                        type(variable.type).__name__,
                        [t.__name__ for t in good_types],
                    )
                )


def calculate_linear_regressor_output_shapes(operator):
    """
    Allowed input/output patterns are
        1. [N, C] ---> [N, T]

    T is the number of targets, 1 unless the estimator exposes
    a larger *n_outputs_* or its coefficients are 2-D.
    """
    check_input_and_output_numbers(operator, input_count_range=1, output_count_range=1)

    N = operator.inputs[0].type.shape[0]
    op = operator.raw_operator
    coef = getattr(op, "coef_", None)
    if coef is not None and len(getattr(coef, "shape", ())) == 2:
        nout = coef.shape[0]
    else:
        nout = 1
    operator.outputs[0].type = FloatTensorType([N, nout])
