# SPDX-License-Identifier: Apache-2.0

import logging

# Pipeline
from sklearn import pipeline

# Linear classifiers
from sklearn.linear_model import LogisticRegression
from sklearn.linear_model import SGDClassifier
from sklearn.svm import LinearSVC

# Linear regressors
from sklearn.linear_model import ElasticNet
from sklearn.linear_model import Lasso
from sklearn.linear_model import LinearRegression
from sklearn.linear_model import Ridge
from sklearn.linear_model import SGDRegressor
from sklearn.svm import LinearSVR

# Operators for preprocessing and feature engineering
from sklearn.decomposition import PCA
from sklearn.decomposition import TruncatedSVD
from sklearn.impute import SimpleImputer
from sklearn.preprocessing import Binarizer
from sklearn.preprocessing import MaxAbsScaler
from sklearn.preprocessing import MinMaxScaler
from sklearn.preprocessing import Normalizer
from sklearn.preprocessing import OneHotEncoder
from sklearn.preprocessing import RobustScaler
from sklearn.preprocessing import StandardScaler

from ...exceptions import MissingConverter
from ..common._container import SklearnModelContainer
from ..common._topology import Topology
from ..common.data_types import (
    DictionaryType,
    FloatTensorType,
    Int64TensorType,
    SequenceType,
)

logger = logging.getLogger("winmlconvert")

# A classifier produces two outputs, the predicted label and the
# probabilities (or scores) of every class. Other models produce one.
sklearn_classifier_list = [LogisticRegression, SGDClassifier, LinearSVC]

# Associates scikit-learn classes with the alias their shape calculator
# and converter are registered with.
sklearn_operator_name_map = {
    StandardScaler: "SklearnScaler",
    RobustScaler: "SklearnRobustScaler",
    MinMaxScaler: "SklearnMinMaxScaler",
    MaxAbsScaler: "SklearnMaxAbsScaler",
    Normalizer: "SklearnNormalizer",
    Binarizer: "SklearnBinarizer",
    SimpleImputer: "SklearnImputer",
    OneHotEncoder: "SklearnOneHotEncoder",
    LogisticRegression: "SklearnLinearClassifier",
    SGDClassifier: "SklearnLinearClassifier",
    LinearSVC: "SklearnLinearSVC",
    LinearRegression: "SklearnLinearRegressor",
    Ridge: "SklearnLinearRegressor",
    Lasso: "SklearnLinearRegressor",
    ElasticNet: "SklearnLinearRegressor",
    SGDRegressor: "SklearnLinearRegressor",
    LinearSVR: "SklearnLinearRegressor",
    TruncatedSVD: "SklearnTruncatedSVD",
    PCA: "SklearnPCA",
}


def _get_sklearn_operator_name(model_type):
    """
    Get operator name of the input argument

    :param model_type:  A scikit-learn class (e.g., SGDClassifier and Binarizer)
    :return: A string which stands for the type of the input model in our conversion framework
    """
    if model_type not in sklearn_operator_name_map:
        raise MissingConverter(
            "Unable to find a converter for model type '%s'. Supported "
            "models are %s."
            % (
                model_type.__name__,
                sorted(set(t.__name__ for t in sklearn_operator_name_map)),
            )
        )
    return sklearn_operator_name_map[model_type]


def _combine_inputs(scope, inputs, tensor_type):
    """
    Returns a single variable of type *tensor_type* holding every
    input concatenated along the feature axis. Nothing is added
    if there is only one input already of that type.
    """
    if len(inputs) == 1 and type(inputs[0].type) is tensor_type:
        return inputs
    operator = scope.declare_local_operator("SklearnConcat")
    operator.inputs = list(inputs)
    variable = scope.declare_local_variable("concatenated", tensor_type())
    operator.outputs.append(variable)
    return operator.outputs


def _parse_sklearn_simple_model(scope, model, inputs, options):
    """
    Handles all the models made of a single stage.

    :param scope: Scope object
    :param model: A scikit-learn object (e.g., StandardScaler and LogisticRegression)
    :param inputs: A list of variables
    :param options: conversion options, see *convert*
    :return: A list of output variables which will be passed to next stage
    """
    alias = _get_sklearn_operator_name(type(model))
    logger.debug("[parse_sklearn] single stage %r -> %r", type(model).__name__, alias)
    this_operator = scope.declare_local_operator(alias, model)
    this_operator.inputs = _combine_inputs(scope, inputs, FloatTensorType)

    if type(model) in sklearn_classifier_list:
        # Types are fixed by the shape calculators.
        label_variable = scope.declare_local_variable("label", Int64TensorType())
        if options.get("zipmap", True):
            proba_type = SequenceType(DictionaryType(Int64TensorType(), FloatTensorType()))
        else:
            proba_type = FloatTensorType()
        probability_variable = scope.declare_local_variable("probabilities", proba_type)
        this_operator.outputs.append(label_variable)
        this_operator.outputs.append(probability_variable)
    else:
        variable = scope.declare_local_variable("variable", FloatTensorType())
        this_operator.outputs.append(variable)
    return this_operator.outputs


def _parse_sklearn_categorical_encoder(scope, model, inputs, options):
    """
    Handles encoders of integer categories. Their inputs are
    concatenated as integers instead of floats.
    """
    alias = _get_sklearn_operator_name(type(model))
    logger.debug(
        "[parse_sklearn] categorical encoder %r -> %r", type(model).__name__, alias
    )
    this_operator = scope.declare_local_operator(alias, model)
    this_operator.inputs = _combine_inputs(scope, inputs, Int64TensorType)
    variable = scope.declare_local_variable("variable", FloatTensorType())
    this_operator.outputs.append(variable)
    return this_operator.outputs


def _parse_sklearn_pipeline(scope, model, inputs, options):
    """
    The outputs of one step are the inputs of the next one, in
    the order the pipeline declares them.

    :param scope: Scope object defined in _topology.py
    :param model: scikit-learn pipeline object
    :param inputs: A list of Variable objects
    :param options: conversion options, see *convert*
    :return: A list of output variables produced by the input pipeline
    """
    logger.debug("[parse_sklearn] pipeline with %d steps", len(model.steps))
    for _, step in model.steps:
        if step is None or step == "passthrough":
            continue
        inputs = _parse_sklearn(scope, step, inputs, options)
    return inputs


# Every supported model is one of three kinds: a pipeline, a single
# stage or a categorical encoder. Single stage is the default kind.
sklearn_parsers_map = {
    pipeline.Pipeline: _parse_sklearn_pipeline,
    OneHotEncoder: _parse_sklearn_categorical_encoder,
}


def _parse_sklearn(scope, model, inputs, options):
    """
    Calls the parser registered for the kind of *model*.

    :param scope: Scope object
    :param model: A scikit-learn object (e.g., OneHotEncoder and LogisticRegression)
    :param inputs: A list of variables
    :param options: conversion options, see *convert*
    :return: The output variables produced by the input model
    """
    parser = sklearn_parsers_map.get(type(model), _parse_sklearn_simple_model)
    return parser(scope, model, inputs, options)


def get_expected_width(model):
    """
    Returns the number of features the first stage of *model*
    was fitted on, None if the estimator does not tell.
    """
    while isinstance(model, pipeline.Pipeline):
        steps = [s for _, s in model.steps if s is not None and s != "passthrough"]
        if not steps:
            return None
        model = steps[0]
    return getattr(model, "n_features_in_", None)


def parse_sklearn(
    model,
    initial_types=None,
    target_opset=None,
    custom_conversion_functions=None,
    custom_shape_calculators=None,
    metadata_props=None,
    options=None,
):
    """
    Builds the Topology representing a scikit-learn model.

    :param model: a fitted scikit-learn estimator or pipeline
    :param initial_types: list of (name, type), one graph input each
    :param target_opset: main opset of the converted model
    :param custom_conversion_functions: alias -> converter
    :param custom_shape_calculators: alias -> shape calculator
    :param metadata_props: dictionary stored in the model metadata
    :param options: conversion options, see *convert*
    :return: a Topology object
    """
    raw_model_container = SklearnModelContainer(model)
    topology = Topology(
        raw_model_container,
        initial_types=initial_types,
        target_opset=target_opset,
        custom_conversion_functions=custom_conversion_functions,
        custom_shape_calculators=custom_shape_calculators,
        metadata_props=metadata_props,
    )

    # One scope is enough for scikit-learn models.
    scope = topology.declare_scope("__root__")

    inputs = []
    for var_name, initial_type in initial_types:
        inputs.append(scope.declare_local_variable(var_name, initial_type))
    for variable in inputs:
        raw_model_container.add_input(variable)

    outputs = _parse_sklearn(scope, model, inputs, options or {})

    for variable in outputs:
        raw_model_container.add_output(variable)
    return topology
