# SPDX-License-Identifier: Apache-2.0

from onnx import helper


class ModelComponentContainer:
    """
    Collects everything needed to build the final ONNX GraphProto
    while converters are called one after another: graph inputs and
    outputs, initializers, nodes and the operator sets they require.
    """

    def __init__(self, target_opset):
        """
        :param target_opset: number, for example, 7 for ONNX 1.2, and 8 for ONNX 1.3.
        """
        # ValueInfoProto of the graph inputs.
        self.inputs = []
        # ValueInfoProto of the graph outputs.
        self.outputs = []
        # TensorProto holding constants.
        self.initializers = []
        # ValueInfoProto of intermediate results.
        self.value_info = []
        # NodeProto in insertion order.
        self.nodes = []
        # (domain, version) pairs, merged later into the model's opset_import.
        self.node_domain_version_pair_sets = set()
        self.target_opset = target_opset

    def _make_value_info(self, variable):
        value_info = helper.ValueInfoProto()
        value_info.name = variable.full_name
        value_info.type.CopyFrom(variable.type.to_onnx_type())
        if variable.type.doc_string:
            value_info.doc_string = variable.type.doc_string
        return value_info

    def add_input(self, variable):
        """
        Declares a Variable as one of the graph inputs.
        """
        self.inputs.append(self._make_value_info(variable))

    def add_output(self, variable):
        """
        Declares a Variable as one of the graph outputs.
        """
        self.outputs.append(self._make_value_info(variable))

    def add_value_info(self, variable):
        self.value_info.append(self._make_value_info(variable))

    def add_initializer(self, name, onnx_type, shape, content):
        """
        Add a TensorProto into the initializer list of the final ONNX model

        :param name: Variable name in the produced ONNX model.
        :param onnx_type: Element types allowed in ONNX tensor, e.g., TensorProto.FLOAT and TensorProto.STRING.
        :param shape: Tensor shape, a list of integers.
        :param content: Flattened tensor values (i.e., a float list or a float array).
        """
        if any(d is None for d in shape):
            raise ValueError(
                "Initializer '%s' must have a fully known shape, got %r."
                % (name, shape)
            )
        tensor = helper.make_tensor(name, onnx_type, shape, content)
        self.initializers.append(tensor)

    def add_node(self, op_type, inputs, outputs, op_domain="", op_version=1, **attrs):
        """
        Add a NodeProto into the node list of the final ONNX model and
        remember which (domain, version) it needs.

        :param op_type: A string (e.g., Scaler and MatMul) indicating the type of the NodeProto
        :param inputs: A list of strings, the names of the node inputs
        :param outputs: A list of strings, the names of the node outputs
        :param op_domain: The domain name (e.g., ai.onnx.ml) of the operator
        :param op_version: The version number of the operator set the node belongs to
        :param attrs: Attribute names and values of the node
        """
        if isinstance(inputs, str):
            inputs = [inputs]
        if isinstance(outputs, str):
            outputs = [outputs]
        for kind, names in (("Inputs", inputs), ("Outputs", outputs)):
            if not isinstance(names, (list, tuple)) or not all(
                isinstance(s, str) for s in names
            ):
                type_list = ",".join(str(type(s)) for s in names)
                raise ValueError(
                    "%s must be a list of string but get [%s]" % (kind, type_list)
                )
        for k, v in attrs.items():
            if v is None:
                raise ValueError(
                    "Failed to create ONNX node '%s'. Attribute '%s' is undefined."
                    % (op_type, k)
                )

        node = helper.make_node(op_type, inputs, outputs, **attrs)
        node.domain = op_domain

        self.node_domain_version_pair_sets.add((op_domain, op_version))
        self.nodes.append(node)


class RawModelContainer:
    """
    Wraps the model to convert so that the parsing framework can
    handle models coming from different libraries the same way.
    """

    def __init__(self, raw_model):
        self._raw_model = raw_model

    @property
    def raw_model(self):
        return self._raw_model

    @property
    def input_names(self):
        """
        Names of the graph inputs, in the order of the final model.
        """
        raise NotImplementedError()

    @property
    def output_names(self):
        """
        Names of the graph outputs, in the order of the final model.
        """
        raise NotImplementedError()


class SklearnModelContainer(RawModelContainer):
    """
    Scikit-learn estimators carry no input or output description so
    the parser registers the variables it creates here.
    """

    def __init__(self, sklearn_model):
        super(SklearnModelContainer, self).__init__(sklearn_model)
        self._inputs = []
        self._outputs = []

    @property
    def input_names(self):
        return [variable.raw_name for variable in self._inputs]

    @property
    def output_names(self):
        return [variable.raw_name for variable in self._outputs]

    def add_input(self, variable):
        # The order of the calls defines the order of the graph inputs.
        if variable not in self._inputs:
            self._inputs.append(variable)

    def add_output(self, variable):
        # The order of the calls defines the order of the graph outputs.
        if variable not in self._outputs:
            self._outputs.append(variable)


class CoremlModelContainer(RawModelContainer):
    """
    A CoreML specification describes its own inputs and outputs.
    """

    @property
    def input_names(self):
        return [str(var.name) for var in self.raw_model.description.input]

    @property
    def output_names(self):
        return [str(var.name) for var in self.raw_model.description.output]
