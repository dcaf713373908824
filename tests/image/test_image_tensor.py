# SPDX-License-Identifier: Apache-2.0

"""
Tests the conversion of images into tensors and back.
"""
import unittest
import numpy
from numpy.testing import assert_array_equal
from winmlconvert import PixelImage, decode_image, encode_image
from winmlconvert.exceptions import InvalidTensorShape, ShapeMismatch

try:
    from PIL import Image
except ImportError:
    Image = None


def _random_image(channel_order, height=3, width=5, seed=0):
    channels = {"GRAY": 1, "RGB": 3, "BGR": 3, "RGBA": 4, "BGRA": 4}[channel_order]
    rng = numpy.random.RandomState(seed)
    shape = (height, width) if channels == 1 else (height, width, channels)
    return PixelImage(rng.randint(0, 256, size=shape).astype(numpy.uint8), channel_order)


class TestPixelImage(unittest.TestCase):
    def test_grayscale_is_squeezed(self):
        image = PixelImage(numpy.zeros((2, 3, 1), dtype=numpy.uint8), "GRAY")
        self.assertEqual(image.pixels.shape, (2, 3))
        self.assertEqual(image.channels, 1)

    def test_channel_count_mismatch(self):
        with self.assertRaises(ShapeMismatch):
            PixelImage(numpy.zeros((2, 3, 3), dtype=numpy.uint8), "RGBA")

    def test_out_of_range(self):
        with self.assertRaises(ValueError):
            PixelImage(numpy.full((2, 2, 3), 256, dtype=numpy.int32), "RGB")

    def test_unknown_order(self):
        with self.assertRaises(ValueError):
            PixelImage(numpy.zeros((2, 2, 3), dtype=numpy.uint8), "XYZ")

    def test_convert_permutes(self):
        pixels = numpy.zeros((1, 1, 3), dtype=numpy.uint8)
        pixels[0, 0] = [10, 20, 30]
        image = PixelImage(pixels, "RGB").convert("BGR")
        self.assertEqual(image.channel_order, "BGR")
        assert_array_equal(image.pixels[0, 0], [30, 20, 10])

    def test_convert_channel_set(self):
        with self.assertRaises(ShapeMismatch):
            _random_image("RGB").convert("RGBA")
        with self.assertRaises(ShapeMismatch):
            _random_image("GRAY").convert("RGB")

    def test_equality_across_orders(self):
        image = _random_image("RGBA")
        self.assertEqual(image, image.convert("BGRA"))
        self.assertNotEqual(image, _random_image("RGBA", seed=1))
        self.assertNotEqual(_random_image("RGB"), _random_image("RGBA"))


class TestImageTensor(unittest.TestCase):
    def test_encode_layout(self):
        pixels = numpy.zeros((2, 3, 3), dtype=numpy.uint8)
        pixels[1, 2] = [1, 2, 3]
        image = PixelImage(pixels, "RGB")
        tensor = encode_image(image, [None, 3, 2, 3], "BGR")
        self.assertEqual(tensor.dtype, numpy.float32)
        self.assertEqual(tensor.shape, (1, 3, 2, 3))
        assert_array_equal(tensor[0, :, 1, 2], [3, 2, 1])
        self.assertEqual(tensor.sum(), 6)

    def test_encode_values_not_scaled(self):
        image = PixelImage(numpy.full((2, 2), 255, dtype=numpy.uint8), "GRAY")
        tensor = encode_image(image, [1, 1, 2, 2], "GRAY")
        assert_array_equal(tensor, numpy.full((1, 1, 2, 2), 255, dtype=numpy.float32))

    def test_round_trip(self):
        for order in ["GRAY", "RGB", "BGR", "RGBA", "BGRA"]:
            with self.subTest(channel_order=order):
                image = _random_image(order)
                shape = [None, image.channels, image.height, image.width]
                tensor = encode_image(image, shape, order)
                decoded = decode_image(tensor, order)
                self.assertEqual(len(decoded), 1)
                self.assertEqual(decoded[0], image)

    def test_round_trip_reordered(self):
        image = _random_image("RGB")
        tensor = encode_image(image, [3, 3, 5], "BGR")
        decoded = decode_image(tensor, "BGR")[0]
        self.assertEqual(decoded.channel_order, "BGR")
        self.assertEqual(decoded, image)

    def test_clamping(self):
        tensor = numpy.array([300.0, -10.0, 127.6, 127.5], dtype=numpy.float32)
        tensor = tensor.reshape((1, 1, 2, 2))
        decoded = decode_image(tensor, "GRAY")[0]
        self.assertEqual(decoded.pixels.dtype, numpy.uint8)
        assert_array_equal(decoded.pixels, [[255, 0], [128, 128]])

    def test_decode_batch(self):
        tensor = numpy.zeros((3, 3, 2, 2), dtype=numpy.float32)
        tensor[2] = 7
        decoded = decode_image(tensor, "RGB")
        self.assertEqual(len(decoded), 3)
        self.assertTrue(all(d.channel_order == "RGB" for d in decoded))
        self.assertEqual(int(decoded[2].pixels.max()), 7)

    def test_height_mismatch(self):
        image = _random_image("RGB", height=3, width=5)
        with self.assertRaises(ShapeMismatch):
            encode_image(image, [1, 3, 4, 5], "RGB")

    def test_width_mismatch(self):
        image = _random_image("RGB", height=3, width=5)
        with self.assertRaises(ShapeMismatch):
            encode_image(image, [1, 3, 3, 6], "RGB")

    def test_channel_mismatch(self):
        image = _random_image("RGB")
        with self.assertRaises(ShapeMismatch):
            encode_image(image, [1, 4, 3, 5], "RGB")
        with self.assertRaises(ShapeMismatch):
            encode_image(image, [1, 4, 3, 5], "RGBA")

    def test_batch_mismatch(self):
        image = _random_image("RGB")
        with self.assertRaises(ShapeMismatch):
            encode_image(image, [2, 3, 3, 5], "RGB")

    def test_symbolic_dims(self):
        image = _random_image("RGB")
        tensor = encode_image(image, ["N", 3, "H", "W"], "RGB")
        self.assertEqual(tensor.shape, (1, 3, 3, 5))

    def test_invalid_rank(self):
        with self.assertRaises(InvalidTensorShape):
            decode_image(numpy.zeros((3, 2, 2), dtype=numpy.float32), "RGB")
        with self.assertRaises(InvalidTensorShape):
            decode_image(numpy.zeros((1, 1, 3, 2, 2), dtype=numpy.float32), "RGB")

    def test_decode_channel_mismatch(self):
        with self.assertRaises(ShapeMismatch):
            decode_image(numpy.zeros((1, 3, 2, 2), dtype=numpy.float32), "RGBA")


@unittest.skipIf(Image is None, reason="Pillow is not installed")
class TestPillowBridge(unittest.TestCase):
    def test_from_pil(self):
        pil = Image.new("RGB", (4, 2), color=(10, 20, 30))
        image = PixelImage.from_pil(pil)
        self.assertEqual(image.channel_order, "RGB")
        self.assertEqual((image.height, image.width), (2, 4))
        assert_array_equal(image.pixels[1, 3], [10, 20, 30])

    def test_from_pil_gray(self):
        image = PixelImage.from_pil(Image.new("L", (3, 3), color=9))
        self.assertEqual(image.channel_order, "GRAY")
        self.assertEqual(image.pixels.shape, (3, 3))

    def test_to_pil(self):
        image = _random_image("BGRA")
        pil = image.to_pil()
        self.assertEqual(pil.mode, "RGBA")
        self.assertEqual(PixelImage.from_pil(pil), image)

    def test_encode_pil(self):
        pil = Image.new("RGB", (4, 2), color=(10, 20, 30))
        tensor = encode_image(pil, [None, 3, 2, 4], "BGR")
        assert_array_equal(tensor[0, :, 0, 0], [30, 20, 10])


if __name__ == "__main__":
    unittest.main()
