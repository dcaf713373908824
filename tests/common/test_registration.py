# SPDX-License-Identifier: Apache-2.0

"""
Tests the registration of converters and shape calculators.
"""
import unittest
import numpy
from winmlconvert.convert.common import (
    get_converter,
    get_shape_calculator,
    register_converter,
    register_shape_calculator,
)
from winmlconvert.convert.common.data_types import FloatTensorType
from winmlconvert.convert.common.onnx_ex import (
    DEFAULT_OPSET_NUMBER,
    get_maximum_opset_supported,
    resolve_target_opset,
)
from winmlconvert.exceptions import MissingConverter


def _dummy_converter(scope, operator, container):
    pass


def _dummy_shape_calculator(operator):
    pass


class TestRegistration(unittest.TestCase):
    def test_register_twice(self):
        register_converter("TestDummyAlias", _dummy_converter)
        self.assertIs(get_converter("TestDummyAlias"), _dummy_converter)
        with self.assertRaises(ValueError):
            register_converter("TestDummyAlias", _dummy_converter)
        register_converter("TestDummyAlias", _dummy_converter, overwrite=True)

        register_shape_calculator("TestDummyAlias", _dummy_shape_calculator)
        self.assertIs(get_shape_calculator("TestDummyAlias"), _dummy_shape_calculator)
        with self.assertRaises(ValueError):
            register_shape_calculator("TestDummyAlias", _dummy_shape_calculator)

    def test_missing(self):
        with self.assertRaises(MissingConverter):
            get_converter("NoSuchAlias")
        with self.assertRaises(MissingConverter):
            get_shape_calculator("NoSuchAlias")
        self.assertTrue(issubclass(MissingConverter, RuntimeError))

    def test_opset(self):
        self.assertLessEqual(get_maximum_opset_supported(), DEFAULT_OPSET_NUMBER)
        self.assertEqual(resolve_target_opset(None), get_maximum_opset_supported())
        self.assertEqual(resolve_target_opset(9), 9)
        with self.assertRaises(RuntimeError):
            resolve_target_opset(10000)


class TestCustomConversion(unittest.TestCase):
    def setUp(self):
        from sklearn.preprocessing import StandardScaler

        self.data = numpy.array([[0, 1], [2, 3], [4, 5]], dtype=numpy.float32)
        self.model = StandardScaler().fit(self.data)

    def test_custom_converter(self):
        from winmlconvert import convert_sklearn

        def convert_as_identity(scope, operator, container):
            container.add_node(
                "Identity",
                operator.inputs[0].full_name,
                operator.outputs[0].full_name,
                name=scope.get_unique_operator_name("Identity"),
            )

        model_onnx = convert_sklearn(
            self.model,
            "custom",
            [("input", FloatTensorType([None, 2]))],
            custom_conversion_functions={"SklearnScaler": convert_as_identity},
        )
        self.assertEqual([n.op_type for n in model_onnx.graph.node], ["Identity"])

    def test_metadata_and_identity(self):
        import winmlconvert
        from winmlconvert import convert_sklearn

        model_onnx = convert_sklearn(
            self.model,
            "scaler",
            [("input", FloatTensorType([None, 2]))],
            doc_string="a scaler",
            metadata_props={"author": "me"},
        )
        self.assertEqual(model_onnx.graph.name, "scaler")
        self.assertEqual(model_onnx.doc_string, "a scaler")
        self.assertEqual(model_onnx.producer_name, winmlconvert.__producer__)
        self.assertEqual(model_onnx.producer_version, winmlconvert.__producer_version__)
        self.assertEqual(model_onnx.domain, winmlconvert.__domain__)
        props = {p.key: p.value for p in model_onnx.metadata_props}
        self.assertEqual(props, {"author": "me"})

    def test_opset_too_low(self):
        from sklearn.decomposition import PCA
        from winmlconvert import convert_sklearn

        model = PCA(n_components=1).fit(self.data)
        with self.assertRaises(RuntimeError):
            convert_sklearn(
                model, "pca", [("input", FloatTensorType([None, 2]))], target_opset=8
            )

    def test_check_model(self):
        import onnx
        from winmlconvert import convert_sklearn

        model_onnx = convert_sklearn(
            self.model, "scaler", [("input", FloatTensorType([None, 2]))]
        )
        onnx.checker.check_model(model_onnx)

    def test_logging(self):
        from winmlconvert import convert_sklearn

        with self.assertLogs("winmlconvert", level="DEBUG") as cm:
            convert_sklearn(self.model, "scaler", [("input", FloatTensorType([None, 2]))])
        info = [line for line in cm.output if line.startswith("INFO:")]
        self.assertEqual(len(info), 1)
        self.assertIn("StandardScaler", info[0])
        self.assertTrue(any("DEBUG" in line for line in cm.output))


if __name__ == "__main__":
    unittest.main()
