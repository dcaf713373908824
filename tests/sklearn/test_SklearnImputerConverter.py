# SPDX-License-Identifier: Apache-2.0

"""
Tests scikit-learn SimpleImputer converter.
"""
import unittest
import numpy
from sklearn.impute import SimpleImputer
from winmlconvert import convert_sklearn
from winmlconvert.convert.common.data_types import FloatTensorType
from tests.utils_backend import compare_transform


class TestSklearnImputerConverter(unittest.TestCase):
    def test_imputer_nan(self):
        data = numpy.array(
            [[1, 2, numpy.nan], [numpy.nan, 3, 4], [5, numpy.nan, 6], [7, 8, 9]],
            dtype=numpy.float32,
        )
        for strategy in ["mean", "median", "most_frequent"]:
            with self.subTest(strategy=strategy):
                model = SimpleImputer(strategy=strategy).fit(data)
                model_onnx = convert_sklearn(
                    model, "imputer", [("input", FloatTensorType([None, 3]))]
                )
                self.assertEqual(model_onnx.graph.node[0].op_type, "Imputer")
                compare_transform(model, model_onnx, data)

    def test_imputer_value(self):
        data = numpy.array([[1, 2, 0], [0, 3, 4], [5, 0, 6]], dtype=numpy.float32)
        model = SimpleImputer(missing_values=0, strategy="mean").fit(data)
        model_onnx = convert_sklearn(
            model, "imputer", [("input", FloatTensorType([None, 3]))]
        )
        compare_transform(model, model_onnx, data)

    def test_imputer_add_indicator(self):
        data = numpy.array([[1, numpy.nan], [2, 3]], dtype=numpy.float32)
        model = SimpleImputer(add_indicator=True).fit(data)
        with self.assertRaises(RuntimeError):
            convert_sklearn(model, "imputer", [("input", FloatTensorType([None, 2]))])


if __name__ == "__main__":
    unittest.main()
