# SPDX-License-Identifier: Apache-2.0

"""
Errors raised by the converters and the image adapter.
Each one derives from the builtin exception a caller would
already be catching for the same kind of mistake.
"""


class SchemaMismatch(ValueError):
    """
    The declared input schema does not describe what the model consumes:
    wrong total width, duplicated names or a missing schema.
    """

    pass


class UnsupportedFeatureType(TypeError):
    """
    A declared element type has no mapping in the ONNX type system
    or is rejected by the operator consuming it.
    """

    pass


class ShapeMismatch(ValueError):
    """
    An image disagrees with the declared tensor shape or channel order.
    """

    pass


class InvalidTensorShape(ValueError):
    """
    A tensor handed to the image decoder is not of rank 4.
    """

    pass


class MissingConverter(RuntimeError):
    """
    No alias, converter or shape calculator is registered for a model.
    """

    pass
