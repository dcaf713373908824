# SPDX-License-Identifier: Apache-2.0

import numpy as np
from ..exceptions import ShapeMismatch
from ..convert.common.utils import pillow_installed

# Channels of every supported order, as stored along the last axis.
CHANNEL_ORDERS = {
    "GRAY": ("Y",),
    "RGB": ("R", "G", "B"),
    "BGR": ("B", "G", "R"),
    "RGBA": ("R", "G", "B", "A"),
    "BGRA": ("B", "G", "R", "A"),
}

_PIL_MODES = {"L": "GRAY", "RGB": "RGB", "RGBA": "RGBA"}


def check_channel_order(channel_order):
    """
    Returns the normalized channel order or raises a ValueError.
    """
    if not isinstance(channel_order, str) or channel_order.upper() not in CHANNEL_ORDERS:
        raise ValueError(
            "Unknown channel order %r, it must be one of %s."
            % (channel_order, list(CHANNEL_ORDERS))
        )
    return channel_order.upper()


def channel_count(channel_order):
    return len(CHANNEL_ORDERS[check_channel_order(channel_order)])


class PixelImage:
    """
    A decoded image: an integer array of shape [H, W, C]
    (or [H, W] for grayscale) with values in [0, 255], and the
    order of its channels.
    """

    def __init__(self, pixels, channel_order):
        channel_order = check_channel_order(channel_order)
        pixels = np.asarray(pixels)
        if not np.issubdtype(pixels.dtype, np.integer):
            raise TypeError(
                "Pixels must be integers, got dtype %s." % pixels.dtype
            )
        if pixels.ndim == 3 and pixels.shape[2] == 1:
            pixels = pixels[:, :, 0]
        if pixels.ndim not in (2, 3):
            raise ShapeMismatch(
                "Pixels must have shape [H, W, C] or [H, W], got %r." % (pixels.shape,)
            )
        channels = 1 if pixels.ndim == 2 else pixels.shape[2]
        if channels != len(CHANNEL_ORDERS[channel_order]):
            raise ShapeMismatch(
                "Channel order %s expects %d channels but the image has %d."
                % (channel_order, len(CHANNEL_ORDERS[channel_order]), channels)
            )
        if pixels.size and (pixels.min() < 0 or pixels.max() > 255):
            raise ValueError("Pixel values must be in [0, 255].")
        self.pixels = pixels
        self.channel_order = channel_order

    @property
    def height(self):
        return self.pixels.shape[0]

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def channels(self):
        return len(CHANNEL_ORDERS[self.channel_order])

    def convert(self, channel_order):
        """
        Returns the same image with its channels permuted into
        *channel_order*. Adding or dropping a channel is not supported.
        """
        channel_order = check_channel_order(channel_order)
        source = CHANNEL_ORDERS[self.channel_order]
        target = CHANNEL_ORDERS[channel_order]
        if sorted(source) != sorted(target):
            raise ShapeMismatch(
                "Cannot convert an image from %s to %s, only permutations "
                "of the channels are supported." % (self.channel_order, channel_order)
            )
        if self.pixels.ndim == 2:
            return PixelImage(self.pixels.copy(), channel_order)
        permutation = [source.index(c) for c in target]
        return PixelImage(self.pixels[:, :, permutation], channel_order)

    def __eq__(self, other):
        if not isinstance(other, PixelImage):
            return NotImplemented
        if sorted(CHANNEL_ORDERS[self.channel_order]) != sorted(
            CHANNEL_ORDERS[other.channel_order]
        ):
            return False
        other = other.convert(self.channel_order)
        return self.pixels.shape == other.pixels.shape and bool(
            np.array_equal(self.pixels, other.pixels)
        )

    __hash__ = None

    def __repr__(self):
        return "PixelImage(height=%d, width=%d, channel_order=%r)" % (
            self.height,
            self.width,
            self.channel_order,
        )

    @staticmethod
    def from_pil(img):
        """
        Builds a PixelImage from a Pillow image. Modes other than
        L, RGB and RGBA are converted to RGB or RGBA first.
        """
        if img.mode not in _PIL_MODES:
            img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
        return PixelImage(np.array(img, dtype=np.uint8), _PIL_MODES[img.mode])

    def to_pil(self):
        """
        Returns a Pillow image in mode L, RGB or RGBA.
        """
        if not pillow_installed():
            raise RuntimeError(
                "Pillow is not installed. Please install Pillow to use this feature."
            )
        from PIL import Image

        image = self
        if self.channel_order == "BGR":
            image = self.convert("RGB")
        elif self.channel_order == "BGRA":
            image = self.convert("RGBA")
        return Image.fromarray(np.ascontiguousarray(image.pixels.astype(np.uint8)))
