# SPDX-License-Identifier: Apache-2.0

import numbers
import numpy as np
from sklearn.linear_model import SGDClassifier
from sklearn.svm import LinearSVC
from ...common._apply_operation import apply_identity
from ...common._registration import register_converter
from ...common.data_types import SequenceType


def _is_one_vs_rest(op):
    """
    Tells if the probabilities of *op* are computed class by class
    with a sigmoid (one-vs-rest) instead of a softmax.
    """
    if isinstance(op, SGDClassifier):
        return True
    multi_class = getattr(op, "multi_class", "auto")
    if multi_class in ("ovr", "warn"):
        return True
    if multi_class in ("auto", "deprecated"):
        return len(op.classes_) <= 2 or getattr(op, "solver", None) == "liblinear"
    return False


def convert_sklearn_linear_classifier(scope, operator, container):
    op = operator.raw_operator
    coefficients = np.asarray(op.coef_, dtype=np.float64).flatten()
    intercepts = np.asarray(op.intercept_, dtype=np.float64).ravel()
    classes = op.classes_
    if len(classes) == 2:
        # One set of coefficients for both classes, the first class
        # gets the opposite score.
        coefficients = np.concatenate([-coefficients, coefficients])
        intercepts = np.concatenate([-intercepts, intercepts])

    is_svc = isinstance(op, LinearSVC)
    one_vs_rest = is_svc or _is_one_vs_rest(op)

    classifier_type = "LinearClassifier"
    classifier_attrs = {"name": scope.get_unique_operator_name(classifier_type)}
    classifier_attrs["coefficients"] = coefficients.astype(np.float32).tolist()
    classifier_attrs["intercepts"] = intercepts.astype(np.float32).tolist()
    classifier_attrs["multi_class"] = 0 if one_vs_rest else 1
    if is_svc:
        classifier_attrs["post_transform"] = "NONE"
    elif one_vs_rest:
        classifier_attrs["post_transform"] = "LOGISTIC"
    else:
        classifier_attrs["post_transform"] = "SOFTMAX"

    if all(isinstance(i, str) for i in classes):
        class_labels = [str(i) for i in classes]
        classifier_attrs["classlabels_strings"] = class_labels
        zipmap_labels = {"classlabels_strings": class_labels}
    elif all(isinstance(i, (numbers.Real, bool, np.bool_)) for i in classes):
        class_labels = [int(i) for i in classes]
        classifier_attrs["classlabels_ints"] = class_labels
        zipmap_labels = {"classlabels_int64s": class_labels}
    else:
        raise RuntimeError("Label vector must be a string or a integer tensor")

    label_name = operator.outputs[0].full_name
    probability_tensor_name = scope.get_unique_variable_name("probability_tensor")

    container.add_node(
        classifier_type,
        operator.inputs[0].full_name,
        [label_name, probability_tensor_name],
        op_domain="ai.onnx.ml",
        **classifier_attrs
    )

    # Make sure the probability sum is 1 over all classes
    if one_vs_rest and not is_svc and len(class_labels) > 2:
        normalized_probability_tensor_name = scope.get_unique_variable_name(
            probability_tensor_name + "_normalized"
        )
        normalizer_type = "Normalizer"
        normalizer_attrs = {
            "name": scope.get_unique_operator_name(normalizer_type),
            "norm": "L1",
        }
        container.add_node(
            normalizer_type,
            probability_tensor_name,
            normalized_probability_tensor_name,
            op_domain="ai.onnx.ml",
            **normalizer_attrs
        )
    else:
        normalized_probability_tensor_name = probability_tensor_name

    # Post-process probability tensor produced by LinearClassifier operator
    if isinstance(operator.outputs[1].type, SequenceType):
        zipmap_type = "ZipMap"
        zipmap_attrs = {"name": scope.get_unique_operator_name(zipmap_type)}
        zipmap_attrs.update(zipmap_labels)
        container.add_node(
            zipmap_type,
            normalized_probability_tensor_name,
            operator.outputs[1].full_name,
            op_domain="ai.onnx.ml",
            **zipmap_attrs
        )
    else:
        apply_identity(
            scope,
            normalized_probability_tensor_name,
            operator.outputs[1].full_name,
            container,
        )


register_converter("SklearnLinearClassifier", convert_sklearn_linear_classifier)
register_converter("SklearnLinearSVC", convert_sklearn_linear_classifier)
