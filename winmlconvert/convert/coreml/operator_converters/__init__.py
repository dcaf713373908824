# SPDX-License-Identifier: Apache-2.0

# To register converters for Core ML operators, import associated modules here.
from . import FeatureVectorizer
from . import GLMClassifier
from . import GLMRegressor
from . import Identity
from . import Imputer
from . import Normalizer
from . import OneHotEncoder
from . import Scaler
from . import TensorToLabel
from . import TensorToProbabilityMap
