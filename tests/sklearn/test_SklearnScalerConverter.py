# SPDX-License-Identifier: Apache-2.0

"""
Tests scikit-learn scalers, Normalizer and Binarizer converters.
"""
import unittest
import numpy
from sklearn.preprocessing import (
    Binarizer,
    MaxAbsScaler,
    MinMaxScaler,
    Normalizer,
    RobustScaler,
    StandardScaler,
)
from winmlconvert import convert_sklearn
from winmlconvert.convert.common.data_types import FloatTensorType
from tests.utils_backend import compare_transform


class TestSklearnScalerConverter(unittest.TestCase):
    def setUp(self):
        rng = numpy.random.RandomState(0)
        self.data = (rng.rand(20, 3) * 10 - 3).astype(numpy.float32)

    def _check(self, model, decimal=4):
        model.fit(self.data)
        model_onnx = convert_sklearn(
            model, "scaler", [("input", FloatTensorType([None, 3]))]
        )
        self.assertIsNotNone(model_onnx)
        compare_transform(model, model_onnx, self.data, decimal=decimal)
        return model_onnx

    def test_standard_scaler(self):
        model_onnx = self._check(StandardScaler())
        self.assertEqual(model_onnx.graph.node[0].op_type, "Scaler")
        self.assertEqual(model_onnx.graph.node[0].domain, "ai.onnx.ml")

    def test_standard_scaler_no_mean(self):
        self._check(StandardScaler(with_mean=False))

    def test_standard_scaler_no_std(self):
        self._check(StandardScaler(with_std=False))

    def test_robust_scaler(self):
        self._check(RobustScaler())

    def test_robust_scaler_no_centering(self):
        self._check(RobustScaler(with_centering=False))

    def test_min_max_scaler(self):
        self._check(MinMaxScaler())

    def test_min_max_scaler_clip(self):
        model = MinMaxScaler(feature_range=(-1, 2), clip=True).fit(self.data)
        model_onnx = convert_sklearn(
            model, "scaler", [("input", FloatTensorType([None, 3]))]
        )
        self.assertIn("Clip", [n.op_type for n in model_onnx.graph.node])
        outside = numpy.array(
            [[-100, 0, 100], [5, 500, -500], [1, 2, 3]], dtype=numpy.float32
        )
        compare_transform(model, model_onnx, outside)

    def test_min_max_scaler_clip_opset_10(self):
        model = MinMaxScaler(clip=True).fit(numpy.array([[0], [1]], dtype=numpy.float32))
        model_onnx = convert_sklearn(
            model, "scaler", [("input", FloatTensorType([None, 1]))], target_opset=10
        )
        compare_transform(model, model_onnx, numpy.array([[5], [-3], [0.25]], dtype=numpy.float32))

    def test_max_abs_scaler(self):
        self._check(MaxAbsScaler())

    def test_normalizer(self):
        for norm in ["l1", "l2"]:
            with self.subTest(norm=norm):
                model_onnx = self._check(Normalizer(norm=norm))
                self.assertEqual(model_onnx.graph.node[0].op_type, "Normalizer")

    def test_normalizer_max(self):
        data = numpy.array([[-4, 1, 2], [3, -6, 1], [0, 0, 0]], dtype=numpy.float32)
        model = Normalizer(norm="max").fit(data)
        model_onnx = convert_sklearn(
            model, "normalizer", [("input", FloatTensorType([None, 3]))]
        )
        compare_transform(model, model_onnx, data)
        compare_transform(model, model_onnx, self.data)

    def test_binarizer(self):
        model_onnx = self._check(Binarizer(threshold=1.5))
        self.assertEqual(model_onnx.graph.node[0].op_type, "Binarizer")


if __name__ == "__main__":
    unittest.main()
