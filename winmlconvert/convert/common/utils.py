# SPDX-License-Identifier: Apache-2.0

import re
import warnings
import numpy as np


def sklearn_installed():
    """
    Checks that *scikit-learn* is available.
    """
    try:
        import sklearn  # noqa F401
    except ImportError:
        return False
    import packaging.version as pv
    from sklearn import __version__

    vers = pv.Version(__version__)
    allowed = pv.Version("1.0")
    if vers < allowed:
        warnings.warn(
            "The converter works for scikit-learn >= 1.0. Earlier versions might not."
        )
    return True


def coreml_installed():
    """
    Checks that *coremltools* is available.
    """
    try:
        import coremltools  # noqa F401

        return True
    except ImportError:
        return False


def pillow_installed():
    """
    Checks that *Pillow* is available.
    """
    try:
        import PIL.Image  # noqa F401

        return True
    except ImportError:
        return False


def get_producer():
    """
    Internal helper function to return the producer
    """
    from ... import __producer__

    return __producer__


def get_producer_version():
    """
    Internal helper function to return the producer version
    """
    from ... import __producer_version__

    return __producer_version__


def get_domain():
    """
    Internal helper function to return the model domain
    """
    from ... import __domain__

    return __domain__


def get_model_version():
    """
    Internal helper function to return the model version
    """
    from ... import __model_version__

    return __model_version__


def is_numeric_type(item):
    numeric_types = (int, float, np.integer, np.floating)
    if isinstance(item, list):
        return all(isinstance(i, numeric_types) for i in item)
    if isinstance(item, np.ndarray):
        return np.issubdtype(item.dtype, np.number)
    return isinstance(item, numeric_types)


def is_string_type(item):
    if isinstance(item, list):
        return all(isinstance(i, str) for i in item)
    if isinstance(item, np.ndarray):
        return np.issubdtype(item.dtype, np.str_)
    return isinstance(item, str)


def is_valid_onnx_name(name):
    """
    Tells if *name* follows the C identifier convention ONNX
    recommends for graph inputs and outputs.
    """
    return re.match(r"^[A-Za-z_][A-Za-z0-9_:/]*$", name) is not None
