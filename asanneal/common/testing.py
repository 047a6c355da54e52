# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Helpers for the test suite (these require pytest)"""

import inspect
import typing as tp
import pytest
import numpy as np


def printed_assert_equal(actual: tp.Any, desired: tp.Any, err_msg: str = "") -> None:
    """np.testing.assert_equal which prints both values in full when failing"""
    try:
        np.testing.assert_equal(actual, desired, err_msg=err_msg)
    except AssertionError:
        print(f"\n{' DEBUG ':#^60}\nExpected: {desired}\nbut got:  {actual}")
        raise


def assert_within_bounds(points: tp.Iterable[tp.Any], lower: tp.Any, upper: tp.Any, err_msg: str = "") -> None:
    """Asserts that all points lie in the box [lower, upper], listing the first
    offending points if not
    """
    lower, upper = (np.asarray(b, dtype=float) for b in (lower, upper))
    outside = [(k, np.asarray(pt)) for k, pt in enumerate(points)
               if np.any(np.asarray(pt) < lower) or np.any(np.asarray(pt) > upper)]
    if outside:
        lines = [f"  - point #{k}: {pt}" for k, pt in outside[:10]]
        messages = ([err_msg] if err_msg else []) + [f"{len(outside)} point(s) out of [{lower}, {upper}]:"] + lines
        raise AssertionError("\n".join(messages))


class parametrized:
    """Named cases for pytest.mark.parametrize:

    .. code-block:: python

        @testing.parametrized(small=(1, 2.0), large=(1000, 1e6))
        def test_square(value: int, expected: float) -> None:
            ...

    Each keyword is the id of a case, and its tuple holds one value per argument
    of the test function (in definition order).
    """

    def __init__(self, **cases: tp.Tuple[tp.Any, ...]):
        assert cases, "At least one case is required"
        self.ids = sorted(cases)
        self.cases = [cases[name] for name in self.ids]
        assert all(isinstance(c, (tuple, list)) for c in self.cases), "Cases must be tuples"
        self.num_args = len(self.cases[0])
        assert all(len(c) == self.num_args for c in self.cases), "All cases must have the same length"

    def __call__(self, func: tp.Callable[..., None]) -> tp.Any:
        names = list(inspect.signature(func).parameters)
        assert len(names) == self.num_args, f"Got {self.num_args} values per case for arguments {names}"
        values = self.cases if self.num_args > 1 else [c[0] for c in self.cases]
        return pytest.mark.parametrize(",".join(names), values, ids=self.ids)(func)
