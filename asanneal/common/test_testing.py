# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import numpy as np
from . import testing


@testing.parametrized(
    inside=([[0, 0], [1, 2], [-1, 2]], ""),
    lower=([[0, 0], [-2, 0]], "1 point(s) out of"),
    upper=([[0, 3], [1, 0], [0, 4]], "2 point(s) out of"),
)
def test_assert_within_bounds(points: tp.List[tp.List[float]], message: str) -> None:
    try:
        testing.assert_within_bounds(points, [-1, 0], [1, 2])
    except AssertionError as error:
        if not message:
            raise AssertionError("An error has been raised while it should not.")
        assert error.args[0].startswith(message), f"Unexpected message {error.args[0]}"
    else:
        if message:
            raise AssertionError("An error should have been raised.")


def test_printed_assert_equal() -> None:
    testing.printed_assert_equal(0, 0)
    np.testing.assert_raises(AssertionError, testing.printed_assert_equal, 0, 1)


@testing.parametrized(
    single=(3,),
    other=(4,),
)
def test_parametrized_single_argument(value: int) -> None:
    assert value in (3, 4)
