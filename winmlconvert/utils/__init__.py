# SPDX-License-Identifier: Apache-2.0

from .main import load_model
from .main import save_model
from .main import save_text
from .main import set_model_version
from .main import set_model_domain
from .main import set_model_doc_string
from .metadata_props import add_metadata_props
from .metadata_props import set_denotation
