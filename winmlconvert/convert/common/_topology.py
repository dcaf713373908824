# SPDX-License-Identifier: Apache-2.0

import logging
import re
import warnings
import onnx
from onnx import helper
from ._registration import get_converter, get_shape_calculator
from ._container import ModelComponentContainer
from .case_insensitive_dict import CaseInsensitiveDict
from .data_types import TensorType
from .onnx_ex import OPSET_TO_IR_VERSION, resolve_target_opset
from .utils import (
    get_model_version,
    get_domain,
    get_producer_version,
    get_producer,
    is_valid_onnx_name,
)

logger = logging.getLogger("winmlconvert")

KNOWN_METADATA_PROPS = CaseInsensitiveDict(
    {
        "Image.BitmapPixelFormat": ["gray8", "rgb8", "bgr8", "rgba8", "bgra8"],
        "Image.ColorSpaceGamma": ["linear", "srgb"],
        "Image.NominalPixelRange": [
            "nominalrange_0_255",
            "normalized_0_1",
            "normalized_1_1",
            "nominalrange_16_235",
        ],
    }
)


class Variable:
    def __init__(self, raw_name, onnx_name, scope, type=None):
        """
        :param raw_name: name of the variable in the original model,
            used as the seed of its ONNX name
        :param onnx_name: name of the variable in the converted model
        :param scope: name of the scope declaring this variable
        :param type: a type from winmlconvert.convert.common.data_types
        """
        self.raw_name = raw_name
        self.onnx_name = onnx_name
        self.scope = scope
        self.type = type
        # Flags maintained while traversing the graph.
        self.is_fed = None
        self.is_root = None
        self.is_leaf = None
        self.is_abandoned = False

    @property
    def full_name(self):
        return self.onnx_name

    def __str__(self):
        if self.raw_name != self.onnx_name:
            return "Var(name='{0}', onnx='{1}', type={2})".format(
                self.raw_name, self.onnx_name, self.type
            )
        return "Var(name='{0}', type={1})".format(self.raw_name, self.type)


class Operator:
    def __init__(self, onnx_name, scope, type, raw_operator, target_opset):
        """
        :param onnx_name: unique name of the operator
        :param scope: name of the scope declaring this operator
        :param type: the alias the shape calculator and the converter
            are registered with, e.g. 'SklearnScaler' or 'innerProduct'
        :param raw_operator: the object this operator comes from,
            a scikit-learn estimator or a CoreML message
        :param target_opset: main opset of the converted model
        """
        self.onnx_name = onnx_name
        self.scope = scope
        self.type = type
        self.raw_operator = raw_operator
        self.inputs = []
        self.outputs = []
        self.is_evaluated = None
        self.is_abandoned = False
        self.target_opset = target_opset

    @property
    def full_name(self):
        return self.onnx_name

    @property
    def input_full_names(self):
        return [variable.full_name for variable in self.inputs]

    @property
    def output_full_names(self):
        return [variable.full_name for variable in self.outputs]

    def infer_types(self):
        get_shape_calculator(self.type)(self)

    def __repr__(self):
        return "Operator(name='{0}', type='{1}', inputs={2}, outputs={3})".format(
            self.onnx_name, self.type, self.input_full_names, self.output_full_names
        )


class Scope:
    def __init__(
        self,
        name,
        parent_scopes=None,
        variable_name_set=None,
        operator_name_set=None,
        target_opset=None,
    ):
        """
        :param name: unique name of this scope in its Topology
        :param parent_scopes: list of enclosing scopes, the direct parent last
        :param variable_name_set: set of variable names already taken,
            shared with the other scopes of the topology
        :param operator_name_set: set of operator names already taken
        :param target_opset: main opset of the converted model
        """
        self.name = name
        self.parent_scopes = parent_scopes if parent_scopes else list()
        self.onnx_variable_names = (
            variable_name_set if variable_name_set is not None else set()
        )
        self.onnx_operator_names = (
            operator_name_set if operator_name_set is not None else set()
        )
        self.target_opset = target_opset

        # raw_name -> [onnx_name, ...], the last one hides the others.
        self.variable_name_mapping = {}
        # onnx_name -> Variable
        self.variables = {}
        # onnx_name -> Operator
        self.operators = {}

    def get_onnx_variable_name(self, seed):
        """
        Returns the latest ONNX name derived from *seed* or creates one.
        """
        if seed in self.variable_name_mapping:
            return self.variable_name_mapping[seed][-1]
        return self.get_unique_variable_name(seed)

    def get_unique_variable_name(self, seed):
        return Topology._generate_unique_name(seed, self.onnx_variable_names)

    def get_unique_operator_name(self, seed):
        return Topology._generate_unique_name(seed, self.onnx_operator_names)

    def find_sink_variables(self):
        """
        Returns the variables no operator of this scope consumes.
        """
        consumed = set()
        for operator in self.operators.values():
            for variable in operator.inputs:
                consumed.add(variable.onnx_name)
        return [
            variable
            for name, variable in self.variables.items()
            if name not in consumed
        ]

    def declare_local_variable(self, raw_name, type=None, prepend=False):
        """
        Creates a new variable. It hides any previous variable
        created with the same *raw_name* unless *prepend* is True.
        """
        onnx_name = self.get_unique_variable_name(raw_name)
        variable = Variable(raw_name, onnx_name, self.name, type)
        self.variables[onnx_name] = variable

        names = self.variable_name_mapping.setdefault(raw_name, [])
        if prepend:
            names.insert(0, onnx_name)
        else:
            names.append(onnx_name)
        return variable

    def get_local_variable_or_declare_one(self, raw_name, type=None):
        """
        Returns the latest variable created with *raw_name*,
        declares a new one if there is none.
        """
        onnx_name = self.get_onnx_variable_name(raw_name)
        if onnx_name in self.variables:
            return self.variables[onnx_name]
        variable = Variable(raw_name, onnx_name, self.name, type)
        self.variables[onnx_name] = variable
        self.variable_name_mapping.setdefault(raw_name, []).append(onnx_name)
        return variable

    def declare_local_operator(self, type, raw_model=None):
        onnx_name = self.get_unique_operator_name(str(type))
        operator = Operator(onnx_name, self.name, type, raw_model, self.target_opset)
        self.operators[onnx_name] = operator
        return operator

    def delete_local_operator(self, onnx_name):
        if onnx_name not in self.onnx_operator_names or onnx_name not in self.operators:
            raise RuntimeError("Operator '%s' cannot be removed." % onnx_name)
        self.onnx_operator_names.discard(onnx_name)
        del self.operators[onnx_name]

    def delete_local_variable(self, onnx_name):
        if onnx_name not in self.onnx_variable_names or onnx_name not in self.variables:
            raise RuntimeError("Variable '%s' cannot be removed." % onnx_name)
        self.onnx_variable_names.discard(onnx_name)
        raw_name = self.variables[onnx_name].raw_name
        self.variable_name_mapping[raw_name].remove(onnx_name)
        del self.variables[onnx_name]


class Topology:
    """
    Intermediate representation of the graph being converted. The
    parsers fill it with scopes, variables and operators, ``compile``
    prepares it and ``convert_topology`` turns it into an ONNX model.
    """

    def __init__(
        self,
        model,
        default_batch_size=None,
        initial_types=None,
        reserved_variable_names=None,
        reserved_operator_names=None,
        target_opset=None,
        custom_conversion_functions=None,
        custom_shape_calculators=None,
        metadata_props=None,
    ):
        """
        :param model: RawModelContainer wrapping the original model
        :param default_batch_size: first dimension given to the inputs
            parsed from CoreML, None leaves it unknown
        :param initial_types: list of (name, type) assigned to the root
            variables declared with that name
        :param reserved_variable_names: names no variable may take
        :param reserved_operator_names: names no operator may take
        :param custom_conversion_functions: alias -> converter, overrides
            the registered converters for this conversion
        :param custom_shape_calculators: alias -> shape calculator
        :param metadata_props: dictionary stored in the model metadata
        """
        self.scopes = []
        self.raw_model = model
        self.scope_names = set()
        self.variable_name_set = (
            reserved_variable_names if reserved_variable_names is not None else set()
        )
        self.operator_name_set = (
            reserved_operator_names if reserved_operator_names is not None else set()
        )
        self.initial_types = initial_types if initial_types else list()
        self.metadata_props = metadata_props if metadata_props else dict()
        self.default_batch_size = default_batch_size
        self.target_opset = target_opset
        self.custom_conversion_functions = (
            custom_conversion_functions if custom_conversion_functions else {}
        )
        self.custom_shape_calculators = (
            custom_shape_calculators if custom_shape_calculators else {}
        )

    @staticmethod
    def _generate_unique_name(seed, existing_names):
        """
        Produces a C-style identifier close to *seed* which is not
        in *existing_names* and adds it to that set.
        """
        if seed == "":
            raise ValueError("Name seed must be an non-empty string")

        seed = re.sub("[^0-9a-zA-Z]", "_", seed)
        if re.match("^[0-9]", seed):
            seed = "_" + seed

        if seed not in existing_names:
            existing_names.add(seed)
            return seed
        i = 1
        while seed + str(i) in existing_names:
            i += 1
        new_name = seed + str(i)
        existing_names.add(new_name)
        return new_name

    def get_unique_scope_name(self, seed):
        return Topology._generate_unique_name(seed, self.scope_names)

    def declare_scope(self, seed, parent_scopes=None):
        scope = Scope(
            self.get_unique_scope_name(seed),
            parent_scopes,
            self.variable_name_set,
            self.operator_name_set,
            self.target_opset,
        )
        self.scopes.append(scope)
        return scope

    def unordered_operator_iterator(self):
        for scope in self.scopes:
            for operator in scope.operators.values():
                yield operator

    def unordered_variable_iterator(self):
        for scope in self.scopes:
            for variable in scope.variables.values():
                yield variable

    def topological_operator_iterator(self):
        """
        Yields the operators so that an operator comes after every
        operator producing one of its inputs.
        """
        self._initialize_graph_status_for_traversing()
        # CoreML classifiers: the probability map is computed first,
        # the label is extracted afterwards.
        priorities = {"tensorToProbabilityMap": 2, "tensorToLabel": 1}
        while not all(
            operator.is_evaluated for operator in self.unordered_operator_iterator()
        ):
            is_evaluation_happened = False
            for operator in sorted(
                self.unordered_operator_iterator(),
                key=lambda op: priorities.get(op.type, 0),
            ):
                if operator.is_evaluated or not all(
                    variable.is_fed for variable in operator.inputs
                ):
                    continue
                for variable in operator.outputs:
                    if variable.is_fed:
                        raise RuntimeError(
                            "Variable {} is produced by more than one operator, "
                            "the last one is '{}' (name='{}').".format(
                                variable, operator.type, operator.onnx_name
                            )
                        )
                    variable.is_fed = True
                operator.is_evaluated = True
                is_evaluation_happened = True
                yield operator

            # A cycle or a variable nobody produces stops the traversal.
            if not is_evaluation_happened:
                break

    def find_root_and_sink_variables(self):
        """
        Returns the variables which are either not produced by any
        operator (graph inputs) or not consumed by any (graph outputs).
        """
        self._initialize_graph_status_for_traversing()
        return [
            variable
            for variable in self.unordered_variable_iterator()
            if variable.is_root or variable.is_leaf
        ]

    def rename_variable(self, old_name, new_name):
        """
        Replaces the ONNX name of a variable everywhere it is recorded:
        the scope dictionaries, the raw name mapping and the name pool.
        """
        scope, variable = next(
            (scope, variable)
            for scope in self.scopes
            for onnx_name, variable in scope.variables.items()
            if onnx_name == old_name
        )

        variable.onnx_name = new_name
        scope.variables[new_name] = variable
        del scope.variables[old_name]

        derived_names = scope.variable_name_mapping[variable.raw_name]
        derived_names[derived_names.index(old_name)] = new_name

        scope.onnx_variable_names.remove(old_name)
        scope.onnx_variable_names.add(new_name)

    def _check_structure(self):
        """
        Raises an exception if a variable or an operator is not
        connected to the rest of the graph.
        """
        unused_variables = set(v.full_name for v in self.unordered_variable_iterator())
        unused_operators = set()

        for operator in self.unordered_operator_iterator():
            if not operator.inputs and not operator.outputs:
                unused_operators.add(operator.full_name)
            for variable in operator.inputs + operator.outputs:
                unused_variables.discard(variable.full_name)

        if unused_variables:
            raise RuntimeError("Isolated variables exist: %s" % unused_variables)
        if unused_operators:
            raise RuntimeError("Isolated operators exist: %s" % unused_operators)

    def _initialize_graph_status_for_traversing(self):
        """
        Marks every root variable as fed and every operator as not
        evaluated, sets is_root and is_leaf on all variables.
        """
        for variable in self.unordered_variable_iterator():
            variable.is_fed = True
            variable.is_root = True
            variable.is_leaf = True

        for operator in self.unordered_operator_iterator():
            operator.is_evaluated = False
            for variable in operator.outputs:
                variable.is_fed = False
                variable.is_root = False
            for variable in operator.inputs:
                variable.is_leaf = False

    def _infer_all_types(self):
        """
        Gives the initial types to the roots then runs the shape
        calculators from the roots to the leaves.
        """
        self._initialize_graph_status_for_traversing()

        for raw_name, initial_type in self.initial_types:
            for scope in self.scopes:
                for onnx_name in scope.variable_name_mapping.get(raw_name, []):
                    variable = scope.variables[onnx_name]
                    if variable.is_root:
                        variable.type = initial_type

        for operator in self.topological_operator_iterator():
            if operator.type in self.custom_shape_calculators:
                self.custom_shape_calculators[operator.type](operator)
            else:
                operator.infer_types()

    def _resolve_duplicates(self):
        """
        Removes the identity operators which are not both fed by a
        graph input and producing a graph output, the consumers of
        their output read their input instead.
        """
        self._initialize_graph_status_for_traversing()

        for operator in self.topological_operator_iterator():
            if operator.type != "identity":
                continue

            if any(variable.is_root for variable in operator.inputs) and any(
                variable.is_leaf for variable in operator.outputs
            ):
                continue

            original = operator.inputs[0]
            duplicate = operator.outputs[0]
            for another_operator in self.unordered_operator_iterator():
                for i, variable in enumerate(another_operator.inputs):
                    if variable.onnx_name == duplicate.onnx_name:
                        another_operator.inputs[i] = original

            _merge_type_annotations(original, duplicate)

            # Deleted after the traversal.
            duplicate.is_abandoned = True
            operator.is_abandoned = True

        for scope in self.scopes:
            for name in [n for n, o in scope.operators.items() if o.is_abandoned]:
                scope.delete_local_operator(name)
            for name in [n for n, v in scope.variables.items() if v.is_abandoned]:
                scope.delete_local_variable(name)

    def _fix_shapes(self):
        """
        Some CoreML operators only work on 4-D tensors while their
        specification may declare 2-D inputs. [N, C] becomes
        [N, C, 1, 1] for the roots consumed by such operators.
        """
        self._initialize_graph_status_for_traversing()

        for operator in self.unordered_operator_iterator():
            if operator.type not in ("scalerPreprocessor",):
                continue
            for variable in operator.inputs:
                if variable.is_root and variable.type is not None:
                    variable.type.shape += [1] * (4 - len(variable.type.shape))

    def _prune(self):
        # A dry traversal marks what can be reached from the roots.
        for _ in self.topological_operator_iterator():
            pass

        for scope in self.scopes:
            for name in [n for n, o in scope.operators.items() if not o.is_evaluated]:
                scope.delete_local_operator(name)
            for name in [n for n, v in scope.variables.items() if not v.is_fed]:
                scope.delete_local_variable(name)

    def compile(self):
        """
        Prepares the topology so that every operator can be converted
        independently: prunes unreachable parts, merges identities,
        fixes input ranks, infers types and checks the structure.
        """
        self._prune()
        self._resolve_duplicates()
        self._fix_shapes()
        self._infer_all_types()
        self._check_structure()


def _merge_type_annotations(original, duplicate):
    # Keeps the documentation of a variable about to be removed.
    if original.type is None or duplicate.type is None:
        return
    if not original.type.doc_string and duplicate.type.doc_string:
        original.type.doc_string = duplicate.type.doc_string

    if not isinstance(original.type, TensorType) or not isinstance(
        duplicate.type, TensorType
    ):
        return
    if not original.type.denotation and duplicate.type.denotation:
        original.type.denotation = duplicate.type.denotation
    if getattr(duplicate.type, "color_space", None) and hasattr(
        original.type, "color_space"
    ):
        original.type.color_space = original.type.color_space or duplicate.type.color_space
    if not original.type.channel_denotations:
        original.type.channel_denotations = duplicate.type.channel_denotations
    elif duplicate.type.channel_denotations:
        original.type.channel_denotations = [
            o or d
            for o, d in zip(
                original.type.channel_denotations, duplicate.type.channel_denotations
            )
        ]
    if len(original.type.shape) == len(duplicate.type.shape):
        original.type.shape = [
            d if o is None else o
            for o, d in zip(original.type.shape, duplicate.type.shape)
        ]


def _validate_metadata(metadata_props):
    """
    Warns about values outside the documented ones for the known
    metadata keys.
    """
    for key, value in metadata_props.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(
                "Metadata keys and values must be strings, got %r: %r."
                % (key, value)
            )
    if len(CaseInsensitiveDict(metadata_props)) != len(metadata_props):
        raise RuntimeError("Duplicate metadata props found")

    for key, value in metadata_props.items():
        valid_values = KNOWN_METADATA_PROPS.get(key)
        if valid_values and value.lower() not in valid_values:
            warnings.warn(
                "Key {} has invalid value {}. Valid values are {}".format(
                    key, value, valid_values
                )
            )


def add_metadata_props(onnx_model, metadata_props, target_opset):
    """
    Add metadata properties to the model. See recommended key names at:
    `Extensibility - Metadata <https://github.com/onnx/onnx/blob/main/docs/IR.md#metadata>`_
    and `Optional Metadata <https://github.com/onnx/onnx/blob/main/docs/IR.md#optional-metadata>`_

    :param onnx_model: ONNX model object
    :param metadata_props: A dictionary of metadata properties,
        with property names and values (example: `{ 'model_author': 'Alice', 'model_license': 'MIT' }`)
    :param target_opset: Target ONNX opset
    """
    if target_opset < 7:
        warnings.warn(
            "Metadata properties are not supported in targeted opset - %d"
            % target_opset
        )
        return
    _validate_metadata(metadata_props)
    new_metadata = {x.key: x.value for x in onnx_model.metadata_props}
    new_metadata.update(metadata_props)
    del onnx_model.metadata_props[:]
    onnx_model.metadata_props.extend(
        onnx.StringStringEntryProto(key=key, value=value)
        for key, value in new_metadata.items()
    )


def _get_main_opset_version(model):
    for op in model.opset_import:
        if op.domain in ("", "ai.onnx"):
            return op.version
    return None


def make_model_ex(
    graph, imported_opset_pairs, target_default_opset, metadata_props=None, **kwargs
):
    """
    Wraps *graph* into a ModelProto: one opset_import per domain with
    the highest version any node requires, the matching IR version,
    the producer information and the metadata.
    """
    onnx_model = helper.make_model(graph, **kwargs)

    opsets = {"": target_default_opset}
    for op_domain, op_version in imported_opset_pairs:
        if op_domain in ("", "ai.onnx"):
            if op_version > target_default_opset:
                raise RuntimeError(
                    "The specified opset %d is too low to convert this model, "
                    "which requires at least opset %d."
                    % (target_default_opset, op_version)
                )
            continue
        opsets[op_domain] = max(opsets.get(op_domain, op_version), op_version)

    del onnx_model.opset_import[:]
    for op_domain, op_version in sorted(opsets.items()):
        op_set = onnx_model.opset_import.add()
        op_set.domain = op_domain
        op_set.version = op_version

    if metadata_props:
        add_metadata_props(onnx_model, metadata_props, target_default_opset)
    opv = _get_main_opset_version(onnx_model) or target_default_opset
    onnx_model.ir_version = OPSET_TO_IR_VERSION.get(opv, onnx.IR_VERSION)
    onnx_model.producer_name = kwargs.get("producer_name", get_producer())
    onnx_model.producer_version = get_producer_version()
    onnx_model.domain = kwargs.get("domain", get_domain())
    onnx_model.model_version = get_model_version()
    return onnx_model


def _declare_graph_io(topology, container):
    roots = {}
    leaves = {}
    for variable in topology.unordered_variable_iterator():
        if variable.is_root:
            roots[variable.raw_name] = variable
        if variable.is_leaf:
            leaves[variable.raw_name] = variable

    for kind, names, known, add in (
        ("input", topology.raw_model.input_names, roots, container.add_input),
        ("output", topology.raw_model.output_names, leaves, container.add_output),
    ):
        invalid_names = [name for name in names if not is_valid_onnx_name(name)]
        if invalid_names:
            warnings.warn(
                "Some %s names are not compliant with ONNX naming convention: %s"
                % (kind, invalid_names)
            )
        for name in names:
            if name in known:
                add(known[name])


def convert_topology(topology, model_name, doc_string, target_opset):
    """
    Converts a compiled Topology into an ONNX ModelProto.

    :param topology: The Topology object to convert
    :param model_name: name given to the GraphProto
    :param doc_string: A string attached to the produced model
    :param target_opset: main opset, None for the highest one supported
    :return: a ONNX ModelProto
    """
    target_opset = resolve_target_opset(target_opset)

    topology._initialize_graph_status_for_traversing()
    container = ModelComponentContainer(target_opset)
    _declare_graph_io(topology, container)

    scopes = {scope.name: scope for scope in topology.scopes}
    for operator in topology.topological_operator_iterator():
        scope = scopes[operator.scope]
        logger.debug(
            "[convert_topology] %s: %s -> %s",
            operator.type,
            operator.input_full_names,
            operator.output_full_names,
        )
        if operator.type in topology.custom_conversion_functions:
            topology.custom_conversion_functions[operator.type](
                scope, operator, container
            )
        else:
            get_converter(operator.type)(scope, operator, container)

    graph = helper.make_graph(
        container.nodes,
        model_name,
        container.inputs,
        container.outputs,
        container.initializers,
    )
    graph.value_info.extend(container.value_info)
    onnx_model = make_model_ex(
        graph,
        container.node_domain_version_pair_sets,
        target_opset,
        topology.metadata_props,
        doc_string=doc_string,
    )
    logger.debug(
        "[convert_topology] graph '%s' converted with opset %d, %d nodes.",
        model_name,
        target_opset,
        len(container.nodes),
    )
    return onnx_model
