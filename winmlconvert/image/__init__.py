# SPDX-License-Identifier: Apache-2.0

"""
Moves images across the boundary of a converted model:
pixels in, NCHW float tensors out, and back.
"""

from .pixel_image import PixelImage, CHANNEL_ORDERS  # noqa: F401
from .tensor import encode_image, decode_image  # noqa: F401
from .model import get_image_channel_order, get_image_input_shape  # noqa: F401
