# SPDX-License-Identifier: Apache-2.0

"""
Tests scikit-learn OneHotEncoder converter.
"""
import unittest
import numpy
from sklearn.preprocessing import OneHotEncoder
from winmlconvert import convert_sklearn
from winmlconvert.convert.common.data_types import Int64TensorType, FloatTensorType
from winmlconvert.exceptions import UnsupportedFeatureType
from tests.utils_backend import run_model


class TestSklearnOneHotEncoderConverter(unittest.TestCase):
    def _dense(self, model, data):
        res = model.transform(data)
        if hasattr(res, "toarray"):
            res = res.toarray()
        return res.astype(numpy.float32)

    def test_one_hot_encoder_int(self):
        data = numpy.array([[1, 2, 3], [4, 3, 0], [0, 1, 4], [0, 5, 6]], dtype=numpy.int64)
        model = OneHotEncoder(categories="auto")
        model.fit(data)
        model_onnx = convert_sklearn(
            model, "one-hot encoder", [("input", Int64TensorType([None, 3]))]
        )
        self.assertTrue(model_onnx is not None)
        op_types = [n.op_type for n in model_onnx.graph.node]
        self.assertEqual(op_types.count("OneHotEncoder"), 3)
        self.assertEqual(op_types[-1], "FeatureVectorizer")
        got = run_model(model_onnx, data)
        numpy.testing.assert_almost_equal(self._dense(model, data), got[0])

    def test_one_hot_encoder_float_input(self):
        data = numpy.array([[1, 2], [4, 3], [1, 2]], dtype=numpy.int64)
        model = OneHotEncoder(categories="auto").fit(data)
        model_onnx = convert_sklearn(
            model, "one-hot encoder", [("input", FloatTensorType([None, 2]))]
        )
        self.assertEqual(model_onnx.graph.node[0].op_type, "Cast")
        got = run_model(model_onnx, data.astype(numpy.float32))
        numpy.testing.assert_almost_equal(self._dense(model, data), got[0])

    def test_one_hot_encoder_mixed_inputs(self):
        data = numpy.array([[1, 2], [4, 3], [1, 2], [0, 3]], dtype=numpy.int64)
        model = OneHotEncoder(categories="auto").fit(data)
        model_onnx = convert_sklearn(
            model,
            "one-hot encoder",
            [("a", Int64TensorType([None, 1])), ("b", Int64TensorType([None, 1]))],
        )
        got = run_model(model_onnx, {"a": data[:, :1], "b": data[:, 1:]})
        numpy.testing.assert_almost_equal(self._dense(model, data), got[0])

    def test_one_hot_encoder_string_categories(self):
        data = numpy.array([["a", "b"], ["c", "b"]])
        model = OneHotEncoder(categories="auto").fit(data)
        with self.assertRaises(UnsupportedFeatureType):
            convert_sklearn(
                model, "one-hot encoder", [("input", Int64TensorType([None, 2]))]
            )

    def test_one_hot_encoder_infrequent_categories(self):
        data = numpy.array([[0], [0], [0], [1], [2], [0], [0]], dtype=numpy.int64)
        for params in [{"min_frequency": 2}, {"max_categories": 2}]:
            with self.subTest(**params):
                model = OneHotEncoder(**params).fit(data)
                with self.assertRaises(RuntimeError):
                    convert_sklearn(
                        model, "one-hot encoder", [("input", Int64TensorType([None, 1]))]
                    )

    def test_one_hot_encoder_drop(self):
        data = numpy.array([[0], [1], [2]], dtype=numpy.int64)
        model = OneHotEncoder(drop="first").fit(data)
        with self.assertRaises(RuntimeError):
            convert_sklearn(
                model, "one-hot encoder", [("input", Int64TensorType([None, 1]))]
            )


if __name__ == "__main__":
    unittest.main()
