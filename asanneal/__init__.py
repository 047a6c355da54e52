# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common import errors as errors
from .optimization.annealer import Annealer
from .optimization.annealer import AnnealState
from .optimization.annealer import Request
from .optimization.history import History
from .optimization.history import load_history
from .optimization import families as families
from .optimization import callbacks as callbacks
from .optimization.families import registry as registry


__all__ = [
    "Annealer",
    "AnnealState",
    "Request",
    "History",
    "load_history",
    "families",
    "callbacks",
    "registry",
    "errors",
    "typing",
]


__version__ = "0.1.0"
