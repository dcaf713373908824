# SPDX-License-Identifier: Apache-2.0

import numbers
import numpy as np
from ...common._registration import register_converter


def convert_sklearn_imputer(scope, operator, container):
    op = operator.raw_operator
    if getattr(op, "add_indicator", False):
        raise RuntimeError("SimpleImputer(add_indicator=True) is not supported.")
    statistics = np.asarray(op.statistics_, dtype=np.float64)
    if np.isnan(statistics).any():
        raise RuntimeError(
            "SimpleImputer has columns without any observed value, "
            "their statistics are undefined."
        )

    op_type = "Imputer"
    attrs = {"name": scope.get_unique_operator_name(op_type)}
    attrs["imputed_value_floats"] = statistics.astype(np.float32).tolist()

    missing = op.missing_values
    if isinstance(missing, str) or not isinstance(missing, numbers.Real):
        raise RuntimeError(
            "Only numeric missing values are supported, got %r." % (missing,)
        )
    # NaN is not equal to itself.
    attrs["replaced_value_float"] = float(missing) if missing == missing else float("nan")

    container.add_node(
        op_type,
        operator.inputs[0].full_name,
        operator.outputs[0].full_name,
        op_domain="ai.onnx.ml",
        **attrs
    )


register_converter("SklearnImputer", convert_sklearn_imputer)
