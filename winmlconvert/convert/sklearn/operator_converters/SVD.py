# SPDX-License-Identifier: Apache-2.0

import numpy as np
from onnx import TensorProto
from ...common._apply_operation import apply_matmul, apply_sub
from ...common._registration import register_converter


def convert_truncated_svd(scope, operator, container):
    """
    TruncatedSVD projects the features on its components,
    transform(X) = X @ components_.T.
    """
    transform_matrix = operator.raw_operator.components_.T
    _add_projection(
        scope, operator, container, operator.inputs[0].full_name, transform_matrix
    )


def convert_pca(scope, operator, container):
    """
    PCA centers the features first, when *whiten* is True every
    projected component is divided by the square root of its
    explained variance.
    """
    op = operator.raw_operator
    transform_matrix = op.components_.T
    if op.whiten:
        transform_matrix = transform_matrix / np.sqrt(op.explained_variance_)

    mean_name = scope.get_unique_variable_name("mean")
    container.add_initializer(
        mean_name,
        TensorProto.FLOAT,
        [op.mean_.shape[0]],
        op.mean_.astype(np.float32).tolist(),
    )
    centered_name = scope.get_unique_variable_name("centered_input")
    apply_sub(scope, [operator.inputs[0].full_name, mean_name], centered_name, container)
    _add_projection(scope, operator, container, centered_name, transform_matrix)


def _add_projection(scope, operator, container, input_name, transform_matrix):
    transform_matrix_name = scope.get_unique_variable_name("transform_matrix")
    container.add_initializer(
        transform_matrix_name,
        TensorProto.FLOAT,
        list(transform_matrix.shape),
        transform_matrix.astype(np.float32).flatten().tolist(),
    )
    apply_matmul(
        scope,
        [input_name, transform_matrix_name],
        operator.outputs[0].full_name,
        container,
    )


register_converter("SklearnTruncatedSVD", convert_truncated_svd)
register_converter("SklearnPCA", convert_pca)
