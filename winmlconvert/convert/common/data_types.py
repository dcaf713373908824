# SPDX-License-Identifier: Apache-2.0

import numbers
import onnx


class DataType:
    def __init__(self, shape=None, doc_string=""):
        self.shape = shape
        self.doc_string = doc_string

    def to_onnx_type(self):
        raise NotImplementedError()

    def __repr__(self):
        return "{}(shape={})".format(self.__class__.__name__, self.shape)


class _ScalarType(DataType):
    _onnx_element_type = None

    def __init__(self, doc_string=""):
        super(_ScalarType, self).__init__([None, 1], doc_string)

    def to_onnx_type(self):
        onnx_type = onnx.TypeProto()
        onnx_type.tensor_type.elem_type = self._onnx_element_type
        onnx_type.tensor_type.shape.dim.add()
        s = onnx_type.tensor_type.shape.dim.add()
        s.dim_value = 1
        return onnx_type

    def __repr__(self):
        return "{}()".format(self.__class__.__name__)


class FloatType(_ScalarType):
    _onnx_element_type = onnx.TensorProto.FLOAT


class Int64Type(_ScalarType):
    _onnx_element_type = onnx.TensorProto.INT64


class StringType(_ScalarType):
    _onnx_element_type = onnx.TensorProto.STRING


class TensorType(DataType):
    """
    Base class of all tensor types. A dimension of the shape is either an
    integer, None for an unknown (e.g. batch) dimension, or a string used
    as a symbolic dimension name in the produced graph.
    """

    def __init__(
        self, shape=None, doc_string="", denotation=None, channel_denotations=None
    ):
        super(TensorType, self).__init__(list(shape) if shape else [], doc_string)
        self.denotation = denotation
        self.channel_denotations = channel_denotations

    def _get_element_onnx_type(self):
        raise NotImplementedError()

    def to_onnx_type(self):
        onnx_type = onnx.TypeProto()
        onnx_type.tensor_type.elem_type = self._get_element_onnx_type()
        for d in self.shape:
            s = onnx_type.tensor_type.shape.dim.add()
            if d is None:
                pass
            elif isinstance(d, numbers.Integral):
                s.dim_value = int(d)
            elif isinstance(d, str):
                s.dim_param = d
            else:
                raise ValueError(
                    "Unsupported dimension type: %s, see %s"
                    % (
                        type(d),
                        "https://github.com/onnx/onnx/blob/main/docs/IR.md#"
                        + "input--output-data-types",
                    )
                )
        if self.denotation:
            onnx_type.denotation = self.denotation
        if self.channel_denotations:
            for d, denotation in zip(
                onnx_type.tensor_type.shape.dim, self.channel_denotations
            ):
                if denotation:
                    d.denotation = denotation
        return onnx_type


class FloatTensorType(TensorType):
    def __init__(
        self,
        shape=None,
        color_space=None,
        doc_string="",
        denotation=None,
        channel_denotations=None,
    ):
        super(FloatTensorType, self).__init__(
            shape, doc_string, denotation, channel_denotations
        )
        self.color_space = color_space

    def _get_element_onnx_type(self):
        return onnx.TensorProto.FLOAT


class DoubleTensorType(TensorType):
    def _get_element_onnx_type(self):
        return onnx.TensorProto.DOUBLE


class Int32TensorType(TensorType):
    def _get_element_onnx_type(self):
        return onnx.TensorProto.INT32


class Int64TensorType(TensorType):
    def _get_element_onnx_type(self):
        return onnx.TensorProto.INT64


class StringTensorType(TensorType):
    def _get_element_onnx_type(self):
        return onnx.TensorProto.STRING


class BooleanTensorType(TensorType):
    def _get_element_onnx_type(self):
        return onnx.TensorProto.BOOL


class SequenceType(DataType):
    def __init__(self, element_type, shape=None, doc_string=""):
        super(SequenceType, self).__init__(shape, doc_string)
        self.element_type = element_type

    def to_onnx_type(self):
        onnx_type = onnx.TypeProto()
        onnx_type.sequence_type.elem_type.CopyFrom(self.element_type.to_onnx_type())
        return onnx_type

    def __repr__(self):
        return "SequenceType(element_type={0})".format(self.element_type)


class DictionaryType(DataType):
    def __init__(self, key_type, value_type, shape=None, doc_string=""):
        super(DictionaryType, self).__init__(shape, doc_string)
        self.key_type = key_type
        self.value_type = value_type

    def to_onnx_type(self):
        onnx_type = onnx.TypeProto()
        if type(self.key_type) in [Int64Type, Int64TensorType]:
            onnx_type.map_type.key_type = onnx.TensorProto.INT64
        elif type(self.key_type) in [StringType, StringTensorType]:
            onnx_type.map_type.key_type = onnx.TensorProto.STRING
        else:
            raise ValueError("Unsupported key type: %r" % self.key_type)
        onnx_type.map_type.value_type.CopyFrom(self.value_type.to_onnx_type())
        return onnx_type

    def __repr__(self):
        return "DictionaryType(key_type={0}, value_type={1})".format(
            self.key_type, self.value_type
        )


# Element type names accepted by FeatureSchema, mapped to their tensor types.
ELEMENT_TYPES = {
    "float32": FloatTensorType,
    "float": FloatTensorType,
    "float64": DoubleTensorType,
    "double": DoubleTensorType,
    "int64": Int64TensorType,
    "int32": Int32TensorType,
    "string": StringTensorType,
    "str": StringTensorType,
    "bool": BooleanTensorType,
}

# Tensor types a graph input can be declared with.
SUPPORTED_INPUT_TYPES = (
    FloatTensorType,
    DoubleTensorType,
    Int64TensorType,
    Int32TensorType,
    StringTensorType,
    BooleanTensorType,
)

NUMERIC_TENSOR_TYPES = (
    FloatTensorType,
    DoubleTensorType,
    Int64TensorType,
    Int32TensorType,
    BooleanTensorType,
)


def guess_proto_type(data_type):
    """
    Guess the corresponding proto type based on data_type.
    """
    if isinstance(data_type, (FloatTensorType, FloatType)):
        return onnx.TensorProto.FLOAT
    if isinstance(data_type, DoubleTensorType):
        return onnx.TensorProto.DOUBLE
    if isinstance(data_type, Int32TensorType):
        return onnx.TensorProto.INT32
    if isinstance(data_type, (Int64TensorType, Int64Type)):
        return onnx.TensorProto.INT64
    if isinstance(data_type, (StringTensorType, StringType)):
        return onnx.TensorProto.STRING
    if isinstance(data_type, BooleanTensorType):
        return onnx.TensorProto.BOOL
    raise NotImplementedError("Unsupported data_type '{}'.".format(data_type))

