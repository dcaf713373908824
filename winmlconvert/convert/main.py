# SPDX-License-Identifier: Apache-2.0

from .common import utils


def convert_sklearn(
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
    if not utils.sklearn_installed():
        raise RuntimeError(
            "scikit-learn is not installed. Please install scikit-learn to use this feature."
        )

    from .sklearn.convert import convert

    return convert(
        model,
        name,
        initial_types,
        doc_string,
        target_opset,
        custom_conversion_functions,
        custom_shape_calculators,
        metadata_props,
        options,
    )


def convert_coreml(
    model,
    name=None,
    initial_types=None,
    doc_string="",
    target_opset=None,
    custom_conversion_functions=None,
    custom_shape_calculators=None,
):
    if not utils.coreml_installed():
        raise RuntimeError(
            "coremltools is not installed. Please install coremltools to use this feature."
        )

    from .coreml.convert import convert

    return convert(
        model,
        name,
        initial_types,
        doc_string,
        target_opset,
        custom_conversion_functions,
        custom_shape_calculators,
    )
