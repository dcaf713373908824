# SPDX-License-Identifier: Apache-2.0

# To register converters for Core ML neural network layers, import associated modules here.
from . import Activation
from . import Flatten
from . import ImageScaler
from . import InnerProduct
from . import Softmax
