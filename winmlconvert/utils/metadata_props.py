# SPDX-License-Identifier: Apache-2.0

import warnings
from ..convert.common._topology import add_metadata_props as _add_metadata_props
from ..convert.common.onnx_ex import get_maximum_opset_supported


def add_metadata_props(onnx_model, metadata_props, target_opset=None):
    """
    Validates and merges *metadata_props* into the metadata of
    *onnx_model*. Unknown values for the image keys only raise a warning.
    """
    if target_opset is None:
        target_opset = get_maximum_opset_supported()
    _add_metadata_props(onnx_model, metadata_props, target_opset)
    return onnx_model


def set_denotation(
    onnx_model, input_name, denotation, dimension_denotation=None, target_opset=None
):
    if target_opset is not None and target_opset < 7:
        warnings.warn(
            "Denotation is not supported in targeted opset - %d" % target_opset
        )
        return
    for graph_input in onnx_model.graph.input:
        if graph_input.name == input_name:
            graph_input.type.denotation = denotation
            if dimension_denotation:
                dimensions = graph_input.type.tensor_type.shape.dim
                if len(dimension_denotation) != len(dimensions):
                    raise RuntimeError(
                        'Wrong number of dimensions: input "{}" has {} dimensions'.format(
                            input_name, len(dimensions)
                        )
                    )
                for dimension, channel_denotation in zip(
                    dimensions, dimension_denotation
                ):
                    dimension.denotation = channel_denotation
            return onnx_model
    raise RuntimeError('Input "{}" not found'.format(input_name))
