# SPDX-License-Identifier: Apache-2.0

import numpy as np
from sklearn.preprocessing import (
    MaxAbsScaler,
    MinMaxScaler,
    RobustScaler,
    StandardScaler,
)
from ...common._apply_operation import apply_clip
from ...common._registration import register_converter


def convert_sklearn_scaler(scope, operator, container):
    """
    ONNX Scaler computes (X - offset) * scale, every scikit-learn
    scaler is expressed with these two vectors.
    """
    op = operator.raw_operator
    C = operator.inputs[0].type.shape[1]
    op_type = "Scaler"
    attrs = {"name": scope.get_unique_operator_name(op_type)}
    if isinstance(op, StandardScaler):
        attrs["offset"] = op.mean_ if op.with_mean else np.zeros(op.n_features_in_)
        attrs["scale"] = (
            1.0 / op.scale_ if op.scale_ is not None else np.ones(op.n_features_in_)
        )
    elif isinstance(op, RobustScaler):
        attrs["offset"] = op.center_ if op.with_centering else [0.0] * C
        attrs["scale"] = 1.0 / op.scale_ if op.with_scaling else [1.0] * C
    elif isinstance(op, MinMaxScaler):
        attrs["scale"] = op.scale_
        attrs["offset"] = -op.min_ / op.scale_
    elif isinstance(op, MaxAbsScaler):
        attrs["scale"] = 1.0 / op.scale_
        attrs["offset"] = [0.0] * op.scale_.shape[0]
    else:
        raise ValueError(
            "Only scikit-learn StandardScaler, RobustScaler, MinMaxScaler "
            "and MaxAbsScaler are supported but got %s" % type(op)
        )

    attrs["offset"] = np.asarray(attrs["offset"], dtype=np.float32).tolist()
    attrs["scale"] = np.asarray(attrs["scale"], dtype=np.float32).tolist()
    output_name = operator.outputs[0].full_name
    clip = isinstance(op, MinMaxScaler) and op.clip
    scaled_name = scope.get_unique_variable_name("scaled") if clip else output_name
    container.add_node(
        op_type,
        operator.inputs[0].full_name,
        scaled_name,
        op_domain="ai.onnx.ml",
        **attrs
    )
    if clip:
        # MinMaxScaler(clip=True) bounds the output to feature_range.
        low, high = op.feature_range
        apply_clip(scope, scaled_name, output_name, container, min=low, max=high)


register_converter("SklearnRobustScaler", convert_sklearn_scaler)
register_converter("SklearnScaler", convert_sklearn_scaler)
register_converter("SklearnMinMaxScaler", convert_sklearn_scaler)
register_converter("SklearnMaxAbsScaler", convert_sklearn_scaler)
