# SPDX-License-Identifier: Apache-2.0

import numpy as np
from onnx import TensorProto
from ....exceptions import UnsupportedFeatureType
from ...common._registration import register_converter


def _integer_categories(categories):
    """
    Returns the categories of every column as lists of integers.
    """
    results = []
    for i, cats in enumerate(categories):
        if cats.dtype.kind not in "iuf":
            raise UnsupportedFeatureType(
                "Column %d of the OneHotEncoder has categories of type %s, "
                "only integer categories are supported." % (i, cats.dtype)
            )
        as_int = cats.astype(np.int64)
        if cats.dtype.kind == "f" and not np.array_equal(as_int, cats):
            raise UnsupportedFeatureType(
                "Column %d of the OneHotEncoder has non integer categories %r."
                % (i, cats.tolist())
            )
        results.append(as_int.tolist())
    return results


def convert_sklearn_one_hot_encoder(scope, operator, container):
    """
    Every column is extracted with ArrayFeatureExtractor and
    encoded with its own OneHotEncoder, FeatureVectorizer puts
    all the encoded columns back together in their order.
    """
    op = operator.raw_operator
    if getattr(op, "drop_idx_", None) is not None:
        raise RuntimeError("OneHotEncoder with drop=%r is not supported." % (op.drop,))
    infrequent = getattr(op, "infrequent_categories_", None)
    if infrequent is not None and any(c is not None for c in infrequent):
        raise RuntimeError(
            "OneHotEncoder grouping infrequent categories (min_frequency=%r, "
            "max_categories=%r) is not supported." % (op.min_frequency, op.max_categories)
        )
    categories = _integer_categories(op.categories_)

    # Variable names produced by one-hot encoders. Each of them is the encoding result of a categorical feature.
    final_variable_names = []
    final_variable_lengths = []
    for i, cats in enumerate(categories):
        # Put a feature index we want to encode to a tensor
        index_variable_name = scope.get_unique_variable_name("target_index")
        container.add_initializer(index_variable_name, TensorProto.INT64, [1], [i])

        # Extract the categorical feature from the original input tensor
        extracted_feature_name = scope.get_unique_variable_name(
            "extracted_feature_at_" + str(i)
        )
        extractor_type = "ArrayFeatureExtractor"
        container.add_node(
            extractor_type,
            [operator.inputs[0].full_name, index_variable_name],
            extracted_feature_name,
            op_domain="ai.onnx.ml",
            name=scope.get_unique_operator_name(extractor_type),
        )

        # Encode the extracted categorical feature as a one-hot vector
        encoder_type = "OneHotEncoder"
        encoded_feature_name = scope.get_unique_variable_name(
            "encoded_feature_at_" + str(i)
        )
        container.add_node(
            encoder_type,
            extracted_feature_name,
            encoded_feature_name,
            op_domain="ai.onnx.ml",
            name=scope.get_unique_operator_name(encoder_type),
            cats_int64s=cats,
        )

        final_variable_names.append(encoded_feature_name)
        final_variable_lengths.append(len(cats))

    collector_type = "FeatureVectorizer"
    container.add_node(
        collector_type,
        final_variable_names,
        operator.outputs[0].full_name,
        op_domain="ai.onnx.ml",
        name=scope.get_unique_operator_name(collector_type),
        inputdimensions=final_variable_lengths,
    )


register_converter("SklearnOneHotEncoder", convert_sklearn_one_hot_encoder)
