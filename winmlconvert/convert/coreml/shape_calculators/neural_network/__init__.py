# SPDX-License-Identifier: Apache-2.0

# To register shape calculators for Core ML neural network layers, import associated modules here.
from . import Flatten
from . import IdentityFloat
from . import InnerProduct
