# SPDX-License-Identifier: Apache-2.0

import numpy as np
from ...common._registration import register_converter


def convert_sklearn_linear_regressor(scope, operator, container):
    op = operator.raw_operator
    coefficients = np.asarray(op.coef_, dtype=np.float64)
    targets = coefficients.shape[0] if coefficients.ndim == 2 else 1
    intercepts = np.asarray(op.intercept_, dtype=np.float64).ravel()
    if intercepts.shape[0] != targets:
        # fit_intercept=False gives a single 0.
        intercepts = np.repeat(intercepts[:1], targets)

    op_type = "LinearRegressor"
    attrs = {"name": scope.get_unique_operator_name(op_type)}
    attrs["coefficients"] = coefficients.astype(np.float32).flatten().tolist()
    attrs["intercepts"] = intercepts.astype(np.float32).tolist()
    attrs["targets"] = targets

    container.add_node(
        op_type,
        operator.input_full_names,
        operator.output_full_names,
        op_domain="ai.onnx.ml",
        **attrs
    )


register_converter("SklearnLinearRegressor", convert_sklearn_linear_regressor)
