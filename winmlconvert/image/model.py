# SPDX-License-Identifier: Apache-2.0

import warnings
from ..convert.common.case_insensitive_dict import CaseInsensitiveDict

PIXEL_FORMAT_KEY = "Image.BitmapPixelFormat"

_PIXEL_FORMATS = CaseInsensitiveDict(
    {
        "gray8": "GRAY",
        "rgb8": "RGB",
        "bgr8": "BGR",
        "rgba8": "RGBA",
        "bgra8": "BGRA",
    }
)


def get_image_channel_order(onnx_model):
    """
    Returns the channel order stored in the metadata of a model,
    None if the model does not declare any pixel format.
    """
    props = CaseInsensitiveDict({p.key: p.value for p in onnx_model.metadata_props})
    pixel_format = props.get(PIXEL_FORMAT_KEY)
    if pixel_format is None:
        return None
    if pixel_format not in _PIXEL_FORMATS:
        warnings.warn(
            "Unknown pixel format %r, valid values are %s."
            % (pixel_format, list(_PIXEL_FORMATS))
        )
        return None
    return _PIXEL_FORMATS[pixel_format]


def get_image_input_shape(onnx_model, input_name):
    """
    Returns the declared shape [N, C, H, W] of a graph input,
    unknown dimensions are None.
    """
    for graph_input in onnx_model.graph.input:
        if graph_input.name == input_name:
            return [
                d.dim_value if d.WhichOneof("value") == "dim_value" else None
                for d in graph_input.type.tensor_type.shape.dim
            ]
    raise KeyError("Input '%s' not found in the model." % input_name)
