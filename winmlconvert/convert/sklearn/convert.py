# SPDX-License-Identifier: Apache-2.0

import logging
from uuid import uuid4
from ..common._topology import convert_topology
from ..common.onnx_ex import resolve_target_opset
from ..common.schema import validate_initial_types
from ._parse import get_expected_width, parse_sklearn

# Invoke the registration of all our converters and shape calculators
from . import shape_calculators  # noqa: F401
from . import operator_converters  # noqa: F401

logger = logging.getLogger("winmlconvert")


def convert(
    model,
    name=None,
    initial_types=None,
    doc_string="",
    target_opset=None,
    custom_conversion_functions=None,
    custom_shape_calculators=None,
    metadata_props=None,
    options=None,
):
    """
    This function produces an equivalent ONNX model of the given scikit-learn model.
    The supported scikit-learn modules are listed below.

    * Preprocessings and transformations:
      * preprocessing.Binarizer
      * impute.SimpleImputer
      * preprocessing.MaxAbsScaler
      * preprocessing.MinMaxScaler
      * preprocessing.Normalizer
      * preprocessing.OneHotEncoder (integer categories)
      * preprocessing.RobustScaler
      * preprocessing.StandardScaler
      * decomposition.PCA
      * decomposition.TruncatedSVD
    * Linear classification and regression:
      * svm.LinearSVC
      * linear_model.LogisticRegression
      * linear_model.SGDClassifier
      * svm.LinearSVR
      * linear_model.LinearRegression
      * linear_model.Ridge
      * linear_model.Lasso
      * linear_model.SGDRegressor
      * linear_model.ElasticNet
    * pipeline
      * pipeline.Pipeline

    For pipeline conversion, user needs to make sure each component is one of our supported items.
    Notice that for all conversions, initial types are required.

    :param model: A fitted scikit-learn model
    :param name: The name of the graph (type: GraphProto) in the produced ONNX model (type: ModelProto)
    :param initial_types: a python list. Each element is a tuple of a variable name and a type
        defined in data_types.py, or a FeatureSchema
    :param doc_string: A string attached onto the produced ONNX model
    :param target_opset: number, for example, 7 for ONNX 1.2, and 8 for ONNX 1.3,
        None for the highest supported opset
    :param custom_conversion_functions: a dictionary for specifying the user customized conversion function
    :param custom_shape_calculators: a dictionary for specifying the user customized shape calculator
    :param metadata_props: a dictionary stored in the metadata of the model
    :param options: a dictionary of conversion options, ``{'zipmap': False}``
        makes classifiers return a float tensor of probabilities
        instead of a sequence of maps
    :return: An ONNX model (type: ModelProto) which is equivalent to the input scikit-learn model

    Example of initial_types:
    Assume that the specified scikit-learn model takes a heterogeneous list as its input.
    If the first 5 elements are floats and the last 10 elements are integers, we need to
    specify initial types as below. None in [None, 5] indicates the batch size is unknown.

    ::

        from winmlconvert.convert.common.data_types import FloatTensorType, Int64TensorType
        initial_type = [('float_input', FloatTensorType([None, 5])),
                        ('int64_input', Int64TensorType([None, 10]))]
    """
    initial_types = validate_initial_types(
        initial_types, expected_width=get_expected_width(model)
    )

    if name is None:
        name = str(uuid4().hex)

    target_opset = resolve_target_opset(target_opset)
    # Parse scikit-learn model as our internal data structure (i.e., Topology)
    topology = parse_sklearn(
        model,
        initial_types,
        target_opset,
        custom_conversion_functions,
        custom_shape_calculators,
        metadata_props,
        options,
    )

    # Infer variable shapes
    topology.compile()

    # Convert our Topology object into ONNX. The outcome is an ONNX model.
    onnx_model = convert_topology(topology, name, doc_string, target_opset)
    logger.info(
        "[convert_sklearn] %s, graph '%s', opset %d, %d nodes.",
        type(model).__name__,
        name,
        target_opset,
        len(onnx_model.graph.node),
    )

    return onnx_model
