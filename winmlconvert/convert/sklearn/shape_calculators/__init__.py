# SPDX-License-Identifier: Apache-2.0

# To register shape calculators for scikit-learn operators, import associated modules here.
from . import Concat
from . import Imputer
from . import LinearClassifier
from . import LinearRegressor
from . import OneHotEncoder
from . import Scaler
from . import SVD
