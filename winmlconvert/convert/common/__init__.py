# SPDX-License-Identifier: Apache-2.0

from . import data_types  # noqa: F401
from ._registration import (  # noqa: F401
    register_converter,
    register_shape_calculator,
    get_converter,
    get_shape_calculator,
)
from .schema import FeatureSchema, validate_initial_types  # noqa: F401
