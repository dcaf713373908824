# SPDX-License-Identifier: Apache-2.0

from .main import convert_coreml
from .main import convert_sklearn
