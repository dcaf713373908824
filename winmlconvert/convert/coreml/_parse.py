# SPDX-License-Identifier: Apache-2.0

import logging
import warnings
from ...exceptions import UnsupportedFeatureType
from ..common._container import CoremlModelContainer
from ..common._topology import Topology
from ..common.data_types import (
    DictionaryType,
    FloatTensorType,
    FloatType,
    Int64TensorType,
    Int64Type,
    StringTensorType,
    StringType,
)

logger = logging.getLogger("winmlconvert")

# CoreML ImageFeatureType.ColorSpace -> (channels, pixel format, description)
_COLOR_SPACES = {
    10: (
        1,
        "Gray8",
        "Image(s) in gray scale. If there are N images, it is a 4-D tensor "
        "with shape [N, 1, H, W]",
    ),
    20: (
        3,
        "Rgb8",
        "Image(s) in RGB format. It is a [N, C, H, W]-tensor. The 1st/2nd/3rd "
        "slices along the C-axis are red, green, and blue channels, respectively.",
    ),
    30: (
        3,
        "Bgr8",
        "Image(s) in BGR format. It is a [N, C, H, W]-tensor. The 1st/2nd/3rd "
        "slices along the C-axis are blue, green, and red channels, respectively.",
    ),
}

# CoreML ArrayFeatureType.ArrayDataType
_FLOAT32 = 65568
_DOUBLE = 65600
_INT32 = 131104


def _parse_coreml_feature(feature_info, batch_size=None):
    """
    Encode type information from CoreML's FeatureType protobuf message in converter's type system.

    Scalar types such as Int64FeatureType, DoubleFeatureType, and StringFeatureType in CoreML are interpreted as
    [batch_size, 1]-tensor. Tensor-like types such as ArrayFeature in CoreML is viewed as tensors with a prepend
    batch_size; for example, we use [batch_size, C, H, W] to denote [C, H, W]-array in CoreML.

    :param feature_info: CoreML FeatureDescription
    :param batch_size: first dimension of every tensor, None if unknown
    :return: one of our Int64Type, FloatType, StringType, Int64TensorType, FloatTensorType, or DictionaryType
    """
    raw_type = feature_info.type
    doc_string = feature_info.shortDescription
    type_name = raw_type.WhichOneof("Type")

    if type_name == "int64Type":
        return Int64Type(doc_string=doc_string)
    elif type_name == "doubleType":
        return FloatType(doc_string=doc_string)
    elif type_name == "stringType":
        return StringType(doc_string=doc_string)
    elif type_name == "imageType":
        # Produce [N, C, H, W]-tensor, where C is the number of color channels, H the height, and W the width.
        color_space = raw_type.imageType.colorSpace
        if color_space not in _COLOR_SPACES:
            raise ValueError(
                "Unknown image format. Only gray-level, RGB, and BGR are supported"
            )
        channels, pixel_format, description = _COLOR_SPACES[color_space]

        if doc_string:
            if doc_string[-1] not in [".", "!", "?"]:
                doc_string += ". "
            else:
                doc_string += " "
        doc_string += description

        shape = [
            batch_size,
            channels,
            raw_type.imageType.height,
            raw_type.imageType.width,
        ]
        return FloatTensorType(
            shape,
            pixel_format,
            doc_string=doc_string,
            denotation="IMAGE",
            channel_denotations=[
                "DATA_BATCH",
                "DATA_CHANNEL",
                "DATA_FEATURE",
                "DATA_FEATURE",
            ],
        )
    elif type_name == "multiArrayType":
        element_type_id = raw_type.multiArrayType.dataType
        shape = [d for d in raw_type.multiArrayType.shape]
        if len(shape) == 1:
            # [C]
            shape = [batch_size, shape[0]]
        elif len(shape) == 3:
            # [C, H, W]
            shape = [batch_size, shape[0], shape[1], shape[2]]
        else:
            shape = [batch_size, None]  # Missing shape information.

        if element_type_id in [_FLOAT32, _DOUBLE]:
            return FloatTensorType(shape, doc_string=doc_string)
        elif element_type_id == _INT32:
            return Int64TensorType(shape, doc_string=doc_string)
        else:
            raise UnsupportedFeatureType(
                "Unsupported array element type: {}".format(element_type_id)
            )
    elif type_name == "dictionaryType":
        key_type = raw_type.dictionaryType.WhichOneof("KeyType")
        if key_type == "int64KeyType":
            return DictionaryType(
                Int64TensorType([]), FloatTensorType([]), doc_string=doc_string
            )
        elif key_type == "stringKeyType":
            return DictionaryType(
                StringTensorType([]), FloatTensorType([]), doc_string=doc_string
            )
        else:
            raise ValueError("Unsupported key type: {}".format(key_type))
    else:
        raise UnsupportedFeatureType("Unsupported feature type: {}".format(type_name))


def _declare_feature(topology, scope, feature_info, prepend=False):
    return scope.declare_local_variable(
        feature_info.name,
        _parse_coreml_feature(feature_info, topology.default_batch_size),
        prepend=prepend,
    )


def _link(scope, source, destination):
    operator = scope.declare_local_operator("identity")
    operator.inputs.append(source)
    operator.outputs.append(destination)


def _link_parent_variables(scope, inputs, outputs):
    """
    Connects the variables given by the enclosing scope with the
    first local variable of the same name (inputs) or the last one
    (outputs).
    """
    for parent_variable in inputs:
        raw_name = parent_variable.raw_name
        child_variable = scope.variables[scope.variable_name_mapping[raw_name][0]]
        _link(scope, parent_variable, child_variable)
    for parent_variable in outputs:
        raw_name = parent_variable.raw_name
        child_variable = scope.variables[scope.variable_name_mapping[raw_name][-1]]
        _link(scope, child_variable, parent_variable)


def _parse_model(topology, scope, model, inputs=None, outputs=None):
    """
    This is a delegate function of all top-level parsing functions. It does nothing but call a proper function
    to parse the given model.
    """
    if inputs is None:
        inputs = list()
    if outputs is None:
        outputs = list()

    model_type = model.WhichOneof("Type")
    logger.debug("[parse_coreml] %r", model_type)
    if model_type in ["pipeline", "pipelineClassifier", "pipelineRegressor"]:
        _parse_pipeline_model(topology, scope, model, inputs, outputs)
    elif model_type in [
        "neuralNetworkClassifier",
        "neuralNetworkRegressor",
        "neuralNetwork",
    ]:
        _parse_neural_network_model(topology, scope, model, inputs, outputs)
    else:
        _parse_simple_model(topology, scope, model, inputs, outputs)


def _parse_simple_model(topology, parent_scope, model, inputs, outputs):
    """
    Parse a model containing only one operator (aka simple model).
    Steps:
        1. Create local scope for allocating local variables and operators
        2. Create operator and then feed the model's inputs and outputs to the operator
        3. Connect local variables and their corresponding parent variables
    Note:
        1. Notice that a CoreML operator can contain no input and output, so we directly use model's inputs (outputs).
        2. Input and output names can be identical in CoreML, but they must be different for ONNX.
    """
    scope = topology.declare_scope("single", [parent_scope] + parent_scope.parent_scopes)
    this_operator = scope.declare_local_operator(model.WhichOneof("Type"), model)

    # Model inputs should not hide any intermediate variables.
    for var in model.description.input:
        this_operator.inputs.append(_declare_feature(topology, scope, var, prepend=True))
    for var in model.description.output:
        this_operator.outputs.append(_declare_feature(topology, scope, var))

    _link_parent_variables(scope, inputs, outputs)


def _parse_pipeline_model(topology, parent_scope, model, inputs, outputs):
    """
    Parse a pipeline including multiple sub-models.
    Steps:
        1. Create local scope for allocating local variables and operators
        2. Sequentially parse the sub-models and create their inputs and outputs variables
        3. Connect model's (not sub-model's) inputs and outputs with proper variables created when parsing sub-models
        4. Link local variables and the corresponding parent variables (only model's inputs and outputs are considered)
    Note:
        1. A CoreML sub-model can use the same variable for its input and output.
        2. Two CoreML variables may have the same name but different types.
    """
    scope = topology.declare_scope("pipeline", [parent_scope] + parent_scope.parent_scopes)

    pipeline_type = model.WhichOneof("Type")
    if pipeline_type == "pipelineClassifier":
        sub_models = model.pipelineClassifier.pipeline.models
    elif pipeline_type == "pipelineRegressor":
        sub_models = model.pipelineRegressor.pipeline.models
    elif pipeline_type == "pipeline":
        sub_models = model.pipeline.models
    else:
        raise ValueError("Unsupported CoreML pipeline type: {0}".format(pipeline_type))

    # Sequentially parse the sub-models, the outputs of one are
    # found by name by the next ones.
    for sub_model in sub_models:
        sub_inputs = []
        for var in sub_model.description.input:
            variable = scope.get_local_variable_or_declare_one(
                var.name, _parse_coreml_feature(var, topology.default_batch_size)
            )
            sub_inputs.append(variable)
        sub_outputs = []
        for var in sub_model.description.output:
            sub_outputs.append(_declare_feature(topology, scope, var))
        _parse_model(topology, scope, sub_model, sub_inputs, sub_outputs)

    # Model inputs are linked to the first variable with the same
    # name, model outputs to the latest one.
    for var in model.description.input:
        child_variable = scope.variables[scope.variable_name_mapping[var.name][0]]
        variable = _declare_feature(topology, scope, var, prepend=True)
        _link(scope, variable, child_variable)
    for var in model.description.output:
        child_variable = scope.variables[scope.variable_name_mapping[var.name][-1]]
        variable = _declare_feature(topology, scope, var)
        _link(scope, child_variable, variable)

    _link_parent_variables(scope, inputs, outputs)


def _find_probability_variable(scope, model, sink_variables):
    probability_name = model.description.predictedProbabilitiesName
    if probability_name in scope.variable_name_mapping:
        return scope.variables[scope.variable_name_mapping[probability_name][-1]]
    # The first sink of the network holds the scores when the
    # model does not name its probability tensor.
    return sink_variables[0]


def _parse_neural_network_model(topology, parent_scope, model, inputs, outputs):
    """
    Parse a neural network model.
    Steps:
        1. Create local scope for allocating local variables and operators
        2. Sequentially parse the preprocessors and layers
        3. Connect model's (neither layers' nor preprocessors') inputs and outputs with proper variables created when
           parsing sub-models.
        4. Link local variables and the corresponding parent variables (only model's inputs and outputs are considered)
    Note:
        1. A CoreML preprocessor/layer can use the same variable for its input and output.
        2. Two CoreML variables may have the same name but different types.
        3. Preprocessor sometime may not include any information about its input
    """
    scope = topology.declare_scope("NeuralNetwork", [parent_scope] + parent_scope.parent_scopes)

    network_type = model.WhichOneof("Type")
    if network_type == "neuralNetworkClassifier":
        network = model.neuralNetworkClassifier
    elif network_type == "neuralNetworkRegressor":
        network = model.neuralNetworkRegressor
    elif network_type == "neuralNetwork":
        network = model.neuralNetwork
    else:
        raise ValueError("Unknown network type {}".format(network_type))

    for op in network.preprocessing:
        operator = scope.declare_local_operator(
            op.WhichOneof("preprocessor") + "Preprocessor", op
        )

        # Infer the variable name to be processed if feature name is an empty string
        name = op.featureName if op.featureName != "" else model.description.input[0].name

        original = scope.get_local_variable_or_declare_one(name)
        original.type = FloatTensorType()
        operator.inputs.append(original)

        processed = scope.declare_local_variable(name)
        processed.type = FloatTensorType()
        operator.outputs.append(processed)

    for op in network.layers:
        operator = scope.declare_local_operator(op.WhichOneof("layer"), op)
        for name in op.input:
            variable = scope.get_local_variable_or_declare_one(name)
            variable.type = FloatTensorType()
            operator.inputs.append(variable)
        for name in op.output:
            variable = scope.declare_local_variable(name)
            variable.type = FloatTensorType()
            operator.outputs.append(variable)

    sink_variables = scope.find_sink_variables()

    for var in model.description.input:
        # Search for the first variable (declared when parsing network layers) associated with the considered raw name
        child_variable = scope.variables[scope.variable_name_mapping[var.name][0]]
        variable = _declare_feature(topology, scope, var, prepend=True)
        _link(scope, variable, child_variable)

    is_classifier = network_type == "neuralNetworkClassifier"
    special_variable_names = [
        model.description.predictedFeatureName,
        model.description.predictedProbabilitiesName,
    ]
    for var in model.description.output:
        # CoreML's predicted label is not connected with any operator, so we handle it later as a special case.
        if is_classifier and var.name in special_variable_names:
            continue
        child_variable = scope.variables[scope.variable_name_mapping[var.name][-1]]
        variable = _declare_feature(topology, scope, var)
        _link(scope, child_variable, variable)

    if is_classifier and model.description.predictedFeatureName:
        # The label is the class with the highest score.
        label_variable = None
        for var in model.description.output:
            if var.name == model.description.predictedFeatureName:
                label_variable = _declare_feature(topology, scope, var)
                break
        operator = scope.declare_local_operator("tensorToLabel", model)
        operator.inputs.append(_find_probability_variable(scope, model, sink_variables))
        operator.outputs.append(label_variable)

    if is_classifier and model.description.predictedProbabilitiesName:
        # Probability tensor is implicitly converted into a dictionary (i.e., map) in CoreML.
        operator = scope.declare_local_operator("tensorToProbabilityMap", model)
        operator.inputs.append(_find_probability_variable(scope, model, sink_variables))
        for var in model.description.output:
            if var.name == model.description.predictedProbabilitiesName:
                operator.outputs.append(_declare_feature(topology, scope, var))
                break

    _link_parent_variables(scope, inputs, outputs)


def parse_coreml(
    model,
    initial_types=None,
    target_opset=None,
    custom_conversion_functions=None,
    custom_shape_calculators=None,
):
    """
    This is the root function of the whole parsing procedure.

    :param model: CoreML model
    :param initial_types: A list providing some types for some root variables. Each element is a tuple of a variable
        name and a type defined in data_types.py.
    :param target_opset: number, for example, 7 for ONNX 1.2, and 8 for ONNX 1.3.
    :param custom_conversion_functions: a dictionary for specifying the user customized conversion function
    :param custom_shape_calculators: a dictionary for specifying the user customized shape calculator
    :return: a Topology object. It's a intermediate representation of the input CoreML model
    """
    # Model-level input and output names are reserved, the variables
    # holding them are renamed after them once the topology is compiled.
    reserved_variable_names = set()
    for var in list(model.description.input) + list(model.description.output):
        reserved_variable_names.add(var.name)

    # Batch size is always missing in CoreML models.
    default_batch_size = None

    topology = Topology(
        CoremlModelContainer(model),
        default_batch_size,
        initial_types,
        reserved_variable_names,
        target_opset=target_opset,
        custom_conversion_functions=custom_conversion_functions,
        custom_shape_calculators=custom_shape_calculators,
    )
    scope = topology.declare_scope("__root__")

    _parse_model(topology, scope, model)
    topology.compile()

    for variable in topology.find_root_and_sink_variables():
        color_space = getattr(variable.type, "color_space", None)
        if color_space:
            if (
                topology.metadata_props.setdefault("Image.BitmapPixelFormat", color_space)
                != color_space
            ):
                warnings.warn(
                    "Conflicting pixel formats found. In ONNX, all input/output "
                    "images must use the same pixel format."
                )
        # Use original CoreML names for model-level input(s)/output(s)
        if (
            variable.raw_name not in reserved_variable_names
            or variable.onnx_name == variable.raw_name
        ):
            continue
        topology.rename_variable(variable.onnx_name, variable.raw_name)
    return topology
