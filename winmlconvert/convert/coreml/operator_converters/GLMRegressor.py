# SPDX-License-Identifier: Apache-2.0

import numpy as np
from ...common._registration import register_converter


def convert_glm_regressor(scope, operator, container):
    from coremltools.proto.GLMRegressor_pb2 import GLMRegressor

    op_type = "LinearRegressor"
    glm = operator.raw_operator.glmRegressor
    attrs = {"name": operator.full_name}

    transform_table = {
        GLMRegressor.NoTransform: "NONE",
        GLMRegressor.Logit: "LOGISTIC",
        GLMRegressor.Probit: "PROBIT",
    }
    if glm.postEvaluationTransform in transform_table:
        attrs["post_transform"] = transform_table[glm.postEvaluationTransform]
    else:
        raise ValueError(
            "Unsupported post-transformation: {}".format(glm.postEvaluationTransform)
        )

    # The weight matrix is E-by-F in both CoreML and ONNX, where E and F
    # respectively denote the number of targets and the number of features.
    matrix_w = np.array([list(w.value) for w in glm.weights], dtype=np.float32)

    attrs["targets"] = matrix_w.shape[0]
    attrs["coefficients"] = matrix_w.flatten().tolist()
    attrs["intercepts"] = [float(i) for i in glm.offset]

    container.add_node(
        op_type,
        operator.input_full_names,
        operator.output_full_names,
        op_domain="ai.onnx.ml",
        **attrs
    )


register_converter("glmRegressor", convert_glm_regressor)
