# SPDX-License-Identifier: Apache-2.0

import logging
from uuid import uuid4
import coremltools
from ..common._topology import convert_topology
from ..common.onnx_ex import resolve_target_opset
from ..common.schema import validate_initial_types
from ._parse import parse_coreml

# Import modules to invoke function registrations
from . import operator_converters  # noqa: F401
from . import shape_calculators  # noqa: F401
from .operator_converters import neural_network as nn_converters  # noqa: F401
from .shape_calculators import neural_network as nn_shape_calculators  # noqa: F401

logger = logging.getLogger("winmlconvert")


def convert(
    model,
    name=None,
    initial_types=None,
    doc_string="",
    target_opset=None,
    custom_conversion_functions=None,
    custom_shape_calculators=None,
):
    """
    This function converts the specified CoreML model into its ONNX counterpart. Some information such as the produced
    ONNX model name can be specified.

    :param model: A CoreML model (https://apple.github.io/coremltools/mlmodel/Format/Model.html) or
        a CoreML MLModel object
    :param initial_types: A list providing some types for some root variables. Each element is a tuple of a variable
        name and a type defined in data_types.py.
    :param name: The name of the graph (type: GraphProto) in the produced ONNX model (type: ModelProto)
    :param doc_string: A string attached onto the produced ONNX model
    :param target_opset: number, for example, 7 for ONNX 1.2, and 8 for ONNX 1.3,
        None for the highest supported opset
    :param custom_conversion_functions: a dictionary for specifying the user customized conversion function
    :param custom_shape_calculators: a dictionary for specifying the user customized shape calculator
    :return: An ONNX model (type: ModelProto) which is equivalent to the input CoreML model

    Example of initial types:
    Assume that 'A' and 'B' are two root variable names used in the CoreML model you want to convert. We can specify
    their types via

    ::

        from winmlconvert.convert.common.data_types import FloatTensorType
        initial_type = [('A', FloatTensorType([40, 12, 1, 1])),
                        ('B', FloatTensorType([1, 32, 1, 1]))]
    """
    if isinstance(model, coremltools.models.MLModel):
        spec = model.get_spec()
    else:
        spec = model

    if initial_types:
        initial_types = validate_initial_types(initial_types, tabular=False)

    if name is None:
        name = str(uuid4().hex)

    target_opset = resolve_target_opset(target_opset)
    # Parse CoreML model as our internal data structure (i.e., Topology)
    topology = parse_coreml(
        spec,
        initial_types,
        target_opset,
        custom_conversion_functions,
        custom_shape_calculators,
    )

    # Parse CoreML description, author, and license. Those information will be attached to the final ONNX model.
    metadata = spec.description.metadata
    if not doc_string and metadata.shortDescription:
        # If doc_string is not specified, we use description from CoreML
        doc_string = metadata.shortDescription
    for key, value in (
        ("author", metadata.author),
        ("license", metadata.license),
        ("version", metadata.versionString),
    ):
        if value:
            topology.metadata_props[key] = value

    # Convert our Topology object into ONNX. The outcome is an ONNX model.
    onnx_model = convert_topology(topology, name, doc_string, target_opset)
    logger.info(
        "[convert_coreml] %s, graph '%s', opset %d, %d nodes.",
        spec.WhichOneof("Type"),
        name,
        target_opset,
        len(onnx_model.graph.node),
    )

    return onnx_model
