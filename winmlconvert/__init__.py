# SPDX-License-Identifier: Apache-2.0

"""
Main entry point to winmlconvert.
This framework converts scikit-learn and CoreML models into ONNX
and moves images in and out of the tensors those models consume.
"""
import logging

__version__ = "1.0.0"
__author__ = "winmlconvert contributors"
__producer__ = "winmlconvert"
__producer_version__ = __version__
__domain__ = "winmlconvert"
__model_version__ = 0

logger = logging.getLogger("winmlconvert")

from .convert import convert_coreml  # noqa: E402
from .convert import convert_sklearn  # noqa: E402
from .convert.common import FeatureSchema  # noqa: E402
from .image import PixelImage, encode_image, decode_image  # noqa: E402
from .utils import load_model  # noqa: E402
from .utils import save_model  # noqa: E402
