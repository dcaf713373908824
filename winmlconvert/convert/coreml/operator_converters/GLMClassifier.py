# SPDX-License-Identifier: Apache-2.0

import numpy as np
from ...common._registration import register_converter


def convert_glm_classifier(scope, operator, container):
    # For classifiers, due to the different representations of classes' probabilities in ONNX and CoreML, some extra
    # operators are required.
    #
    #  X: input feature vector
    #  Y: the best output label (i.e., the one with highest probability)
    #  P: probability dictionary of all classes
    #  T: probability tensor produced by ONNX classifier
    #  T': normalized version of T, its sum must be 1
    #
    # Binary classification:
    #
    #            X ---> LinearClassifier ---> Y
    #                           |
    #                           '-----------> T ---> ZipMap ---> P
    #
    # Multi-class classification:
    #
    #            X ---> LinearClassifier ---> Y
    #                           |
    #                           '-----------> T ---> L1-norm Normalizer ---> T' ---> ZipMap ---> P
    #
    # ZipMap and P only exist if the CoreML model has a probability output.
    from coremltools.proto.GLMClassifier_pb2 import GLMClassifier

    op_type = "LinearClassifier"
    attrs = {"name": operator.full_name}
    zipmap_attrs = {"name": scope.get_unique_operator_name("ZipMap")}
    glm = operator.raw_operator.glmClassifier

    transform_table = {GLMClassifier.Logit: "LOGISTIC", GLMClassifier.Probit: "PROBIT"}
    if glm.postEvaluationTransform not in transform_table:
        raise ValueError(
            "Unsupported post-transformation: {}".format(glm.postEvaluationTransform)
        )
    attrs["post_transform"] = transform_table[glm.postEvaluationTransform]

    encoding_table = {GLMClassifier.ReferenceClass: 1, GLMClassifier.OneVsRest: 0}
    if glm.classEncoding not in encoding_table:
        raise ValueError("Unsupported class encoding: {}".format(glm.classEncoding))
    attrs["multi_class"] = encoding_table[glm.classEncoding]

    matrix_w = np.array([list(w.value) for w in glm.weights], dtype=np.float64)

    if glm.WhichOneof("ClassLabels") == "stringClassLabels":
        class_labels = list(str(s) for s in glm.stringClassLabels.vector)
        attrs["classlabels_strings"] = class_labels
        zipmap_attrs["classlabels_strings"] = class_labels
    elif glm.WhichOneof("ClassLabels") == "int64ClassLabels":
        class_labels = list(int(i) for i in glm.int64ClassLabels.vector)
        attrs["classlabels_ints"] = class_labels
        zipmap_attrs["classlabels_int64s"] = class_labels
    else:
        raise ValueError("Unknown class label type")

    coefficients = matrix_w.flatten().tolist()
    intercepts = list(float(i) for i in glm.offset)
    if len(class_labels) == 2:
        # Handle the binary case for coefficients and intercepts
        coefficients = [-x for x in coefficients] + coefficients
        intercepts = [-x for x in intercepts] + intercepts

    attrs["coefficients"] = coefficients
    attrs["intercepts"] = intercepts

    # Find label name and probability name
    raw_model = operator.raw_operator
    label_output_name = None
    proba_output_name = None
    for variable in operator.outputs:
        if raw_model.description.predictedFeatureName == variable.raw_name:
            label_output_name = variable.full_name
        if (
            raw_model.description.predictedProbabilitiesName != ""
            and raw_model.description.predictedProbabilitiesName == variable.raw_name
        ):
            proba_output_name = variable.full_name
    if label_output_name is None:
        raise RuntimeError(
            "Output '%s' holding the predicted label is missing."
            % raw_model.description.predictedFeatureName
        )

    inputs = [variable.full_name for variable in operator.inputs]
    proba_tensor_name = scope.get_unique_variable_name("ProbabilityTensor")
    container.add_node(
        op_type,
        inputs,
        [label_output_name, proba_tensor_name],
        op_domain="ai.onnx.ml",
        **attrs
    )
    if proba_output_name is None:
        # The probability tensor is not consumed.
        return

    # Sigmoid applied independently to every score does not sum to 1
    # when there are more than two classes.
    if len(class_labels) > 2:
        normalized_proba_tensor_name = scope.get_unique_variable_name(
            proba_tensor_name + "_normalized"
        )
        container.add_node(
            "Normalizer",
            proba_tensor_name,
            normalized_proba_tensor_name,
            op_domain="ai.onnx.ml",
            name=scope.get_unique_operator_name("Normalizer"),
            norm="L1",
        )
    else:
        normalized_proba_tensor_name = proba_tensor_name

    container.add_node(
        "ZipMap",
        [normalized_proba_tensor_name],
        [proba_output_name],
        op_domain="ai.onnx.ml",
        **zipmap_attrs
    )


register_converter("glmClassifier", convert_glm_classifier)
