# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import asanneal.common.typing as tp
from asanneal.common import errors


class DelayedJob:
    """Future-like object evaluating its function the first time its result is required"""

    def __init__(self, func: tp.Callable[..., tp.Any], *args: tp.Any, **kwargs: tp.Any) -> None:
        self._call = (func, args, kwargs)
        self._output: tp.List[tp.Any] = []  # holds the result once computed

    def done(self) -> bool:
        return True  # results can always be computed immediately

    def result(self) -> tp.Any:
        if not self._output:
            func, args, kwargs = self._call
            self._output.append(func(*args, **kwargs))
        return self._output[0]


class SequentialExecutor:
    """Executor computing the submitted jobs sequentially in the current process,
    when their results are requested
    """

    def submit(self, fn: tp.Callable[..., tp.Any], *args: tp.Any, **kwargs: tp.Any) -> DelayedJob:
        return DelayedJob(fn, *args, **kwargs)


def as_bounds(param_ranges: tp.Bounds, dimension: int) -> tp.Tuple[np.ndarray, np.ndarray]:
    """Converts a sequence of (min, max) pairs into lower and upper bound arrays

    Raises
    ------
    AnnealValueError
        if the number of pairs does not match the dimension, or if a pair is inverted
    """
    ranges = np.array(param_ranges, dtype=float)
    if ranges.ndim != 2 or ranges.shape[1] != 2:
        raise errors.AnnealValueError(
            f"Parameter ranges must be a sequence of (min, max) pairs, got shape {ranges.shape}"
        )
    if ranges.shape[0] != dimension:
        raise errors.AnnealValueError(
            f"Got {ranges.shape[0]} parameter ranges for {dimension} initial parameters"
        )
    lower, upper = ranges[:, 0].copy(), ranges[:, 1].copy()
    if not np.all(np.isfinite(ranges)):
        raise errors.AnnealValueError(f"Parameter ranges must be finite, got {ranges.tolist()}")
    inverted = np.nonzero(lower > upper)[0]
    if inverted.size:
        raise errors.AnnealValueError(f"Parameter ranges have min > max for dimension(s) {inverted.tolist()}")
    return lower, upper
