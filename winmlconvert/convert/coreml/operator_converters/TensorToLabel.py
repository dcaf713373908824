# SPDX-License-Identifier: Apache-2.0

from onnx import TensorProto
from ...common._registration import register_converter


def get_class_labels(raw_model):
    """
    Returns the class labels of a CoreML classifier and the ONNX
    element type they are stored with.
    """
    model_type = raw_model.WhichOneof("Type")
    if model_type == "neuralNetworkClassifier":
        model = raw_model.neuralNetworkClassifier
    else:
        raise ValueError(
            "Only neural network classifiers are supported, got %s" % model_type
        )
    if model.WhichOneof("ClassLabels") == "stringClassLabels":
        return list(str(s) for s in model.stringClassLabels.vector), TensorProto.STRING
    if model.WhichOneof("ClassLabels") == "int64ClassLabels":
        return list(int(i) for i in model.int64ClassLabels.vector), TensorProto.INT64
    raise ValueError("Unknown label type found")


def convert_tensor_to_label(scope, operator, container):
    """
    Converts the dummy operator 'tensorToLabel' into the ONNX
    operators extracting the label with the highest probability.
    The scores are aligned with the class labels of the CoreML
    model: for labels ['a', 'b'] the input is
    [probability_of_class_a, probability_of_class_b].

    ::

        Probability tensor [N, C]
                |
                v
              ArgMax                    class labels [C] (initializer)
                |                               |
                v                               |
          best index [N, 1]                     |
                |                               |
                v                               v
        ArrayFeatureExtractor  <----------------'
                |
                v
        predicted label
    """
    labels, label_type = get_class_labels(operator.raw_operator)
    if label_type == TensorProto.STRING:
        labels = [s.encode("utf-8") for s in labels]

    label_buffer_name = scope.get_unique_variable_name("ClassLabels")
    container.add_initializer(label_buffer_name, label_type, [len(labels)], labels)

    # Extract most possible label index
    extracted_id_name = scope.get_unique_variable_name("LabelId")
    container.add_node(
        "ArgMax",
        [operator.inputs[0].full_name],
        [extracted_id_name],
        name=scope.get_unique_operator_name("LabelIndexExtractor"),
        axis=1,
        keepdims=1,
    )

    # Pick up the label indicated by the selected ID
    container.add_node(
        "ArrayFeatureExtractor",
        [label_buffer_name, extracted_id_name],
        [operator.outputs[0].full_name],
        op_domain="ai.onnx.ml",
        name=scope.get_unique_operator_name("LabelSelector"),
    )


register_converter("tensorToLabel", convert_tensor_to_label)
