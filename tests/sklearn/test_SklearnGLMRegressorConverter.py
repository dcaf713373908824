# SPDX-License-Identifier: Apache-2.0

"""
Tests scikit-learn linear regressors converters.
"""
import unittest
import numpy
from sklearn.datasets import load_diabetes
from sklearn.linear_model import (
    ElasticNet,
    Lasso,
    LinearRegression,
    Ridge,
    SGDRegressor,
)
from sklearn.svm import LinearSVR
from winmlconvert import convert_sklearn
from winmlconvert.convert.common.data_types import FloatTensorType
from tests.utils_backend import compare_regressor, run_model


class TestSklearnGLMRegressorConverter(unittest.TestCase):
    def setUp(self):
        diabetes = load_diabetes()
        self.X = diabetes.data[:, :4].astype(numpy.float32)
        self.y = diabetes.target

    def _check(self, model, decimal=2):
        model.fit(self.X, self.y)
        model_onnx = convert_sklearn(
            model, "regressor", [("input", FloatTensorType([None, 4]))]
        )
        self.assertIsNotNone(model_onnx)
        self.assertEqual(model_onnx.graph.node[0].op_type, "LinearRegressor")
        compare_regressor(model, model_onnx, self.X, decimal=decimal)
        return model_onnx

    def test_linear_regression(self):
        self._check(LinearRegression())

    def test_linear_regression_no_intercept(self):
        self._check(LinearRegression(fit_intercept=False))

    def test_ridge(self):
        self._check(Ridge())

    def test_lasso(self):
        self._check(Lasso())

    def test_elastic_net(self):
        self._check(ElasticNet())

    def test_sgd_regressor(self):
        self._check(SGDRegressor(random_state=0))

    def test_linear_svr(self):
        self._check(LinearSVR(max_iter=5000, random_state=0))

    def test_multi_target(self):
        y = numpy.vstack([self.y, self.y * 2 + 1]).T
        model = LinearRegression().fit(self.X, y)
        model_onnx = convert_sklearn(
            model, "regressor", [("input", FloatTensorType([None, 4]))]
        )
        got = run_model(model_onnx, self.X)
        self.assertEqual(got[0].shape, (self.X.shape[0], 2))
        numpy.testing.assert_almost_equal(
            model.predict(self.X).astype(numpy.float32), got[0], decimal=2
        )


if __name__ == "__main__":
    unittest.main()
