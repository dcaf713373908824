# SPDX-License-Identifier: Apache-2.0

import numbers
from ...exceptions import SchemaMismatch, UnsupportedFeatureType
from .data_types import ELEMENT_TYPES, SUPPORTED_INPUT_TYPES


class FeatureSchema:
    """
    Ordered description of the inputs of a model. Every entry
    is a triple *(name, element type, dimension)*, for example::

        schema = FeatureSchema([("numeric", "float32", 3),
                                ("category", "int64", 1)])
        onx = convert_sklearn(model, initial_types=schema.initial_types)

    The element type is either one of the names in
    ``ELEMENT_TYPES`` or a tensor type class such as *FloatTensorType*.
    """

    def __init__(self, entries=None):
        self._entries = []
        for entry in entries or []:
            self.add(*entry)

    def add(self, name, element_type, dimension):
        if not isinstance(name, str) or not name:
            raise SchemaMismatch("Feature name must be a non empty string, got %r." % name)
        if any(name == e[0] for e in self._entries):
            raise SchemaMismatch("Feature name '%s' is declared twice." % name)
        if isinstance(dimension, bool) or not isinstance(dimension, numbers.Integral):
            raise SchemaMismatch(
                "Dimension of feature '%s' must be an integer, got %r." % (name, dimension)
            )
        if dimension <= 0:
            raise SchemaMismatch(
                "Dimension of feature '%s' must be positive, got %d." % (name, dimension)
            )
        self._entries.append((name, _resolve_element_type(element_type), int(dimension)))
        return self

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    @property
    def names(self):
        return [e[0] for e in self._entries]

    @property
    def total_width(self):
        """
        Number of features the model receives once every entry is concatenated.
        """
        return sum(e[2] for e in self._entries)

    @property
    def initial_types(self):
        """
        List of *(name, type)* with an unknown batch dimension,
        the format every converter expects.
        """
        return [(name, cls([None, dim])) for name, cls, dim in self._entries]


def _resolve_element_type(element_type):
    if isinstance(element_type, type) and issubclass(element_type, SUPPORTED_INPUT_TYPES):
        return element_type
    if isinstance(element_type, str) and element_type.lower() in ELEMENT_TYPES:
        return ELEMENT_TYPES[element_type.lower()]
    raise UnsupportedFeatureType(
        "Element type %r has no ONNX counterpart, it must be one of %s."
        % (element_type, sorted(ELEMENT_TYPES))
    )


def feature_width(data_type):
    """
    Returns the last dimension of a 2-D tensor type, None if unknown.
    """
    shape = data_type.shape
    if len(shape) != 2:
        raise SchemaMismatch(
            "Features must be declared with a 2-D shape [batch, features], "
            "got %r." % (shape,)
        )
    dim = shape[1]
    return dim if isinstance(dim, numbers.Integral) else None


def validate_initial_types(initial_types, expected_width=None, tabular=True):
    """
    Checks the list of *(name, type)* given to a converter.

    :param initial_types: a list of (name, type) or a FeatureSchema
    :param expected_width: number of features the model consumes,
        None skips the width check
    :param tabular: inputs must be 2-D [batch, features],
        False for models consuming images or other tensors
    :return: the list of (name, type)
    """
    if isinstance(initial_types, FeatureSchema):
        initial_types = initial_types.initial_types
    if not initial_types:
        raise SchemaMismatch(
            "Initial types are required. See usage of convert(...) in "
            "winmlconvert.convert.sklearn.convert for details"
        )

    seen = set()
    total = 0
    unknown = False
    for entry in initial_types:
        if not isinstance(entry, (tuple, list)) or len(entry) != 2:
            raise SchemaMismatch(
                "Every initial type must be a pair (name, type), got %r." % (entry,)
            )
        name, data_type = entry
        if name in seen:
            raise SchemaMismatch("Input name '%s' is declared twice." % name)
        seen.add(name)
        if not isinstance(data_type, SUPPORTED_INPUT_TYPES):
            raise UnsupportedFeatureType(
                "Input '%s' has type %r which has no ONNX counterpart. Use one of %s."
                % (name, data_type, [t.__name__ for t in SUPPORTED_INPUT_TYPES])
            )
        if not tabular:
            continue
        width = feature_width(data_type)
        if width is None:
            unknown = True
        else:
            total += width

    if expected_width is not None and not unknown and total != expected_width:
        raise SchemaMismatch(
            "The inputs declare %d features in total but the model "
            "expects %d." % (total, expected_width)
        )
    return list(initial_types)
