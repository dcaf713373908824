# SPDX-License-Identifier: Apache-2.0

"""
Tests scikit-learn pipelines and the way the declared inputs
are combined before the first step.
"""
import unittest
import numpy
from sklearn.datasets import load_iris
from sklearn.decomposition import PCA
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import MinMaxScaler, StandardScaler
from winmlconvert import convert_sklearn, FeatureSchema
from winmlconvert.convert.common.data_types import (
    FloatTensorType,
    Int64TensorType,
    StringTensorType,
)
from winmlconvert.exceptions import (
    MissingConverter,
    SchemaMismatch,
    UnsupportedFeatureType,
)
from tests.utils_backend import compare_classifier, compare_transform, run_model


class TestSklearnPipeline(unittest.TestCase):
    def test_pipeline(self):
        data = numpy.array([[0, 0], [0, 0], [1, 1], [1, 1]], dtype=numpy.float32)
        scaler = StandardScaler()
        scaler.fit(data)
        model = Pipeline([("scaler1", scaler), ("scaler2", scaler)])

        model_onnx = convert_sklearn(
            model, "pipeline", [("input", FloatTensorType([None, 2]))]
        )
        self.assertTrue(model_onnx is not None)
        compare_transform(model, model_onnx, data)

    def test_pipeline_order(self):
        rng = numpy.random.RandomState(0)
        data = rng.rand(10, 4).astype(numpy.float32)
        model = Pipeline([("scale", MinMaxScaler()), ("pca", PCA(n_components=2))])
        model.fit(data)

        model_onnx = convert_sklearn(
            model, "pipeline", [("input", FloatTensorType([None, 4]))]
        )
        nodes = list(model_onnx.graph.node)
        op_types = [n.op_type for n in nodes]
        scaler_index = op_types.index("Scaler")
        matmul_index = op_types.index("MatMul")
        self.assertLess(scaler_index, matmul_index)

        # The second step consumes what the first one produces.
        scaler_output = nodes[scaler_index].output[0]
        consumers = [n for n in nodes[scaler_index + 1:] if scaler_output in n.input]
        self.assertEqual(len(consumers), 1)
        self.assertEqual(consumers[0].op_type, "Sub")
        self.assertEqual(model_onnx.graph.output[0].name, nodes[matmul_index].output[0])
        compare_transform(model, model_onnx, data)

    def test_pipeline_passthrough(self):
        rng = numpy.random.RandomState(0)
        data = rng.rand(10, 3).astype(numpy.float32)
        model = Pipeline([("skip", "passthrough"), ("scale", StandardScaler())])
        model.fit(data)
        model_onnx = convert_sklearn(
            model, "pipeline", [("input", FloatTensorType([None, 3]))]
        )
        compare_transform(model, model_onnx, data)

    def test_pipeline_classifier(self):
        iris = load_iris()
        X = iris.data.astype(numpy.float32)
        model = Pipeline(
            [("scale", StandardScaler()), ("clf", LogisticRegression(max_iter=500))]
        )
        model.fit(X, iris.target)
        model_onnx = convert_sklearn(
            model, "pipeline", [("input", FloatTensorType([None, 4]))]
        )
        self.assertEqual(len(model_onnx.graph.output), 2)
        compare_classifier(model, model_onnx, X)

    def test_combine_inputs(self):
        data = numpy.array([[0.0, 0.0], [0.0, 0.0], [1.0, 1.0], [1.0, 1.0]], dtype=numpy.float32)
        scaler = StandardScaler()
        scaler.fit(data)
        model = Pipeline([("scaler1", scaler), ("scaler2", scaler)])

        model_onnx = convert_sklearn(
            model,
            "pipeline",
            [("input1", FloatTensorType([None, 1])), ("input2", FloatTensorType([None, 1]))],
        )
        self.assertEqual([i.name for i in model_onnx.graph.input], ["input1", "input2"])
        self.assertEqual(model_onnx.graph.node[-1].op_type, "Scaler")
        self.assertEqual(len(model_onnx.graph.node[-1].output), 1)
        feeds = {"input1": data[:, :1], "input2": data[:, 1:]}
        compare_transform(model, model_onnx, data, feeds=feeds)

    def test_combine_inputs_floats_ints(self):
        iris = load_iris()
        X = iris.data.copy()
        X[:, 3] = numpy.round(X[:, 3] * 10)
        model = Pipeline(
            [("scale", StandardScaler()), ("clf", LogisticRegression(max_iter=500))]
        )
        model.fit(X, iris.target)

        schema = FeatureSchema([("numeric", "float32", 3), ("category", "int64", 1)])
        model_onnx = convert_sklearn(model, "pipeline", schema)
        self.assertEqual(
            [i.name for i in model_onnx.graph.input], ["numeric", "category"]
        )
        op_types = [n.op_type for n in model_onnx.graph.node]
        self.assertIn("Cast", op_types)
        self.assertIn("Concat", op_types)
        feeds = {
            "numeric": X[:, :3].astype(numpy.float32),
            "category": X[:, 3:].astype(numpy.int64),
        }
        compare_classifier(model, model_onnx, X.astype(numpy.float32), feeds=feeds)

    def test_declared_width(self):
        data = numpy.random.RandomState(0).rand(5, 4).astype(numpy.float32)
        model = StandardScaler().fit(data)
        schema = FeatureSchema([("a", "float32", 1), ("b", "float32", 3)])
        model_onnx = convert_sklearn(model, "scaler", schema.initial_types)
        dims = [
            i.type.tensor_type.shape.dim[1].dim_value for i in model_onnx.graph.input
        ]
        self.assertEqual(sum(dims), schema.total_width)
        self.assertEqual(sum(dims), model.n_features_in_)
        got = run_model(model_onnx, {"a": data[:, :1], "b": data[:, 1:]})
        self.assertEqual(got[0].shape, (5, 4))

    def test_width_mismatch(self):
        data = numpy.random.RandomState(0).rand(5, 4).astype(numpy.float32)
        model = Pipeline([("scale", StandardScaler())]).fit(data)
        with self.assertRaises(SchemaMismatch):
            convert_sklearn(model, "scaler", [("input", FloatTensorType([None, 3]))])

    def test_duplicate_names(self):
        data = numpy.random.RandomState(0).rand(5, 2).astype(numpy.float32)
        model = StandardScaler().fit(data)
        with self.assertRaises(SchemaMismatch):
            convert_sklearn(
                model,
                "scaler",
                [("x", FloatTensorType([None, 1])), ("x", FloatTensorType([None, 1]))],
            )

    def test_missing_initial_types(self):
        data = numpy.random.RandomState(0).rand(5, 2).astype(numpy.float32)
        model = StandardScaler().fit(data)
        with self.assertRaises(SchemaMismatch):
            convert_sklearn(model, "scaler")

    def test_string_feature(self):
        data = numpy.random.RandomState(0).rand(5, 2).astype(numpy.float32)
        model = StandardScaler().fit(data)
        with self.assertRaises(UnsupportedFeatureType):
            convert_sklearn(
                model,
                "scaler",
                [("x", FloatTensorType([None, 1])), ("s", StringTensorType([None, 1]))],
            )

    def test_unknown_type_class(self):
        data = numpy.random.RandomState(0).rand(5, 2).astype(numpy.float32)
        model = StandardScaler().fit(data)
        with self.assertRaises(UnsupportedFeatureType):
            convert_sklearn(model, "scaler", [("x", numpy.float32)])

    def test_unsupported_model(self):
        from sklearn.neighbors import KNeighborsClassifier

        data = numpy.random.RandomState(0).rand(6, 2).astype(numpy.float32)
        model = KNeighborsClassifier(n_neighbors=1).fit(data, [0, 1, 0, 1, 0, 1])
        with self.assertRaises(MissingConverter):
            convert_sklearn(model, "knn", [("x", FloatTensorType([None, 2]))])

    def test_int64_input_single(self):
        data = numpy.array([[0, 1], [2, 3], [4, 8]], dtype=numpy.int64)
        model = StandardScaler().fit(data)
        model_onnx = convert_sklearn(
            model, "scaler", [("input", Int64TensorType([None, 2]))]
        )
        got = run_model(model_onnx, data)
        numpy.testing.assert_almost_equal(
            model.transform(data).astype(numpy.float32), got[0], decimal=5
        )


if __name__ == "__main__":
    unittest.main()
