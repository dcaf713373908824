# SPDX-License-Identifier: Apache-2.0

from .convert import convert  # noqa: F401
