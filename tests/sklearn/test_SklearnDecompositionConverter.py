# SPDX-License-Identifier: Apache-2.0

"""
Tests scikit-learn TruncatedSVD and PCA converters.
"""
import unittest
import numpy
from sklearn.decomposition import PCA, TruncatedSVD
from winmlconvert import convert_sklearn
from winmlconvert.convert.common.data_types import FloatTensorType
from tests.utils_backend import compare_transform


class TestSklearnDecompositionConverter(unittest.TestCase):
    def setUp(self):
        rng = numpy.random.RandomState(0)
        self.data = rng.rand(20, 6).astype(numpy.float32)

    def _convert(self, model):
        model.fit(self.data)
        return convert_sklearn(
            model, "decomposition", [("input", FloatTensorType([None, 6]))]
        )

    def test_truncated_svd(self):
        model = TruncatedSVD(n_components=3, random_state=0)
        model_onnx = self._convert(model)
        self.assertEqual([n.op_type for n in model_onnx.graph.node], ["MatMul"])
        self.assertEqual(model_onnx.graph.output[0].type.tensor_type.shape.dim[1].dim_value, 3)
        compare_transform(model, model_onnx, self.data, decimal=4)

    def test_pca(self):
        model = PCA(n_components=2)
        model_onnx = self._convert(model)
        self.assertEqual([n.op_type for n in model_onnx.graph.node], ["Sub", "MatMul"])
        compare_transform(model, model_onnx, self.data, decimal=4)

    def test_pca_whiten(self):
        model = PCA(n_components=3, whiten=True)
        model_onnx = self._convert(model)
        compare_transform(model, model_onnx, self.data, decimal=3)


if __name__ == "__main__":
    unittest.main()
