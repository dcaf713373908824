# SPDX-License-Identifier: Apache-2.0

import logging
import numbers
import numpy as np
from ..exceptions import InvalidTensorShape, ShapeMismatch
from .pixel_image import PixelImage, channel_count, check_channel_order

logger = logging.getLogger("winmlconvert")


def _known(dim):
    # None and symbolic dimensions match anything.
    if isinstance(dim, numbers.Integral) and not isinstance(dim, bool):
        return int(dim)
    return None


def _as_pixel_image(image):
    if isinstance(image, PixelImage):
        return image
    if hasattr(image, "getbands") and hasattr(image, "mode"):
        return PixelImage.from_pil(image)
    raise TypeError(
        "Expected a PixelImage or a Pillow image, got %r." % type(image)
    )


def encode_image(image, declared_shape, channel_order):
    """
    Converts an image into the float tensor an image input expects.

    :param image: a PixelImage or a Pillow image
    :param declared_shape: [N, C, H, W] or [C, H, W] as declared by
        the model input, every dimension may be None
    :param channel_order: channel order of the model input,
        GRAY, RGB, BGR, RGBA or BGRA
    :return: a float32 array of shape [1, C, H, W], pixel values
        are not rescaled
    """
    image = _as_pixel_image(image)
    channel_order = check_channel_order(channel_order)
    expected_channels = channel_count(channel_order)

    declared_shape = list(declared_shape)
    if len(declared_shape) == 4:
        batch = _known(declared_shape[0])
        if batch is not None and batch != 1:
            raise ShapeMismatch(
                "Only one image can be encoded, the declared batch size is %d." % batch
            )
        declared_shape = declared_shape[1:]
    if len(declared_shape) != 3:
        raise ShapeMismatch(
            "Declared shape must be [N, C, H, W] or [C, H, W], got %r."
            % (declared_shape,)
        )
    channels, height, width = [_known(d) for d in declared_shape]

    if channels is not None and channels != expected_channels:
        raise ShapeMismatch(
            "Declared shape has %d channels but channel order %s has %d."
            % (channels, channel_order, expected_channels)
        )
    if image.channels != expected_channels:
        raise ShapeMismatch(
            "The image has %d channels (%s) but the input expects %d (%s)."
            % (image.channels, image.channel_order, expected_channels, channel_order)
        )
    if height is not None and height != image.height:
        raise ShapeMismatch(
            "Declared height is %d but the image height is %d." % (height, image.height)
        )
    if width is not None and width != image.width:
        raise ShapeMismatch(
            "Declared width is %d but the image width is %d." % (width, image.width)
        )

    pixels = image.convert(channel_order).pixels
    if pixels.ndim == 2:
        pixels = pixels[:, :, np.newaxis]
    # HWC to NCHW
    tensor = np.transpose(pixels, (2, 0, 1))[np.newaxis, ...]
    logger.debug(
        "[encode_image] %s image %dx%d -> %r",
        channel_order,
        image.height,
        image.width,
        tensor.shape,
    )
    return np.ascontiguousarray(tensor, dtype=np.float32)


def decode_image(tensor, channel_order):
    """
    Converts a tensor [N, C, H, W] produced by a model into images.
    Values are clamped to [0, 255] and rounded half up.

    :param tensor: array of rank 4
    :param channel_order: channel order of the model output
    :return: a list of N PixelImage
    """
    channel_order = check_channel_order(channel_order)
    tensor = np.asarray(tensor)
    if tensor.ndim != 4:
        raise InvalidTensorShape(
            "An image tensor must have shape [N, C, H, W], got %r." % (tensor.shape,)
        )
    expected_channels = channel_count(channel_order)
    if tensor.shape[1] != expected_channels:
        raise ShapeMismatch(
            "The tensor has %d channels but channel order %s has %d."
            % (tensor.shape[1], channel_order, expected_channels)
        )

    values = np.nan_to_num(tensor.astype(np.float64), nan=0.0)
    values = np.floor(np.clip(values, 0, 255) + 0.5).astype(np.uint8)
    # NCHW to NHWC
    values = np.transpose(values, (0, 2, 3, 1))
    return [PixelImage(values[i], channel_order) for i in range(values.shape[0])]
