# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Types used throughout asanneal, to be imported as
:code:`import asanneal.common.typing as tp`
"""
# pylint: disable=unused-import
from typing import Any as Any
from typing import Type as Type
from typing import TypeVar as TypeVar
from typing import Optional as Optional
from typing import Union as Union
from typing import Callable as Callable
from typing import NamedTuple as NamedTuple
from typing import Dict as Dict
from typing import Tuple as Tuple
from typing import List as List
from typing import Set as Set
from typing import Deque as Deque
from typing import Sequence as Sequence
from typing import Mapping as Mapping
from typing import Iterable as Iterable
from pathlib import Path as Path
from typing_extensions import Protocol

import numpy as _np


ArrayLike = Union[Tuple[float, ...], List[float], _np.ndarray]
PathLike = Union[str, Path]
# one (min, max) pair per parameter
Bounds = Union[Sequence[Tuple[float, float]], Sequence[Sequence[float]], _np.ndarray]
ObjectiveFunction = Callable[[_np.ndarray], float]


# executors (eg: concurrent.futures) used for evaluating the requested points

R = TypeVar("R", covariant=True)


class JobLike(Protocol[R]):
    # pylint: disable=pointless-statement

    def done(self) -> bool:
        ...

    def result(self) -> R:
        ...


class ExecutorLike(Protocol):
    # pylint: disable=pointless-statement, unused-argument

    def submit(self, fn: Callable[..., R], *args: Any, **kwargs: Any) -> JobLike[R]:
        ...
