# SPDX-License-Identifier: Apache-2.0

"""
Tests scikit-learn linear classifiers converters.
"""
import unittest
import numpy
from numpy.testing import assert_array_equal
from sklearn.datasets import load_iris
from sklearn.linear_model import LogisticRegression, SGDClassifier
from sklearn.svm import LinearSVC
from winmlconvert import convert_sklearn
from winmlconvert.convert.common.data_types import FloatTensorType
from tests.utils_backend import compare_classifier, run_model


class TestSklearnGLMClassifierConverter(unittest.TestCase):
    def _get_iris(self, binary=False):
        iris = load_iris()
        X = iris.data[:, :3].astype(numpy.float32)
        y = iris.target
        if binary:
            y = y.copy()
            y[y == 2] = 1
        return X, y

    def _convert(self, model, X, options=None):
        return convert_sklearn(
            model,
            "classifier",
            [("input", FloatTensorType([None, X.shape[1]]))],
            options=options,
        )

    def validate_zipmap(self, model_onnx):
        nodes = model_onnx.graph.node
        node = next((n for n in nodes if n.op_type == "ZipMap"), None)
        self.assertIsNotNone(node)
        self.assertEqual(len(node.output), 1)

    def test_logistic_regression_binary(self):
        X, y = self._get_iris(binary=True)
        model = LogisticRegression(max_iter=500).fit(X, y)
        model_onnx = self._convert(model, X)
        self.validate_zipmap(model_onnx)
        compare_classifier(model, model_onnx, X)

    def test_logistic_regression_multinomial(self):
        X, y = self._get_iris()
        model = LogisticRegression(max_iter=1000).fit(X, y)
        model_onnx = self._convert(model, X)
        self.validate_zipmap(model_onnx)
        compare_classifier(model, model_onnx, X)

    def test_sgd_classifier_one_vs_rest_proba(self):
        X, y = self._get_iris()
        model = SGDClassifier(loss="log_loss", random_state=0).fit(X, y)
        model_onnx = self._convert(model, X)
        op_types = [n.op_type for n in model_onnx.graph.node]
        self.assertIn("Normalizer", op_types)
        compare_classifier(model, model_onnx, X, decimal=3)

    def test_logistic_regression_no_zipmap(self):
        X, y = self._get_iris()
        model = LogisticRegression(max_iter=1000).fit(X, y)
        model_onnx = self._convert(model, X, options={"zipmap": False})
        op_types = [n.op_type for n in model_onnx.graph.node]
        self.assertNotIn("ZipMap", op_types)
        proba = model_onnx.graph.output[1]
        self.assertEqual(proba.type.tensor_type.elem_type, 1)
        self.assertEqual(proba.type.tensor_type.shape.dim[1].dim_value, 3)
        got = run_model(model_onnx, X)
        self.assertEqual(got[1].shape, (X.shape[0], 3))
        compare_classifier(model, model_onnx, X)

    def test_logistic_regression_string_labels(self):
        X, y = self._get_iris()
        labels = numpy.array(["setosa", "versicolor", "virginica"])[y]
        model = LogisticRegression(max_iter=1000).fit(X, labels)
        model_onnx = self._convert(model, X)
        got = run_model(model_onnx, X)
        assert_array_equal(model.predict(X), got[0])

    def test_linear_svc(self):
        X, y = self._get_iris()
        model = LinearSVC(max_iter=5000).fit(X, y)
        model_onnx = self._convert(model, X)
        self.validate_zipmap(model_onnx)
        compare_classifier(model, model_onnx, X, proba=False)

    def test_linear_svc_binary(self):
        X, y = self._get_iris(binary=True)
        model = LinearSVC(max_iter=5000).fit(X, y)
        model_onnx = self._convert(model, X)
        compare_classifier(model, model_onnx, X, proba=False)

    def test_sgd_classifier(self):
        X, y = self._get_iris()
        model = SGDClassifier(random_state=0).fit(X, y)
        model_onnx = self._convert(model, X)
        compare_classifier(model, model_onnx, X, proba=False)

    def test_sgd_classifier_log_loss(self):
        X, y = self._get_iris(binary=True)
        model = SGDClassifier(loss="log_loss", random_state=0).fit(X, y)
        model_onnx = self._convert(model, X)
        compare_classifier(model, model_onnx, X, decimal=3)


if __name__ == "__main__":
    unittest.main()
