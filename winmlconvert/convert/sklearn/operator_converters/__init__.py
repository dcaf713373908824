# SPDX-License-Identifier: Apache-2.0

# To register converter for scikit-learn operators, import associated modules here.
from . import Binarizer
from . import Concat
from . import Imputer
from . import LinearClassifier
from . import LinearRegressor
from . import Normalizer
from . import OneHotEncoder
from . import Scaler
from . import SVD
