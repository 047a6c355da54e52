# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .annealer import Annealer  # main class
from .annealer import AnnealState
from .annealer import Request
from . import families
from .families import registry
