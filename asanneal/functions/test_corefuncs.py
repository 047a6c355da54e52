# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import numpy as np
from asanneal.common import testing
from . import corefuncs


@testing.parametrized(**{name: (name, func) for name, func in corefuncs.registry.items()})
def testcorefuncs_function(name: str, func: tp.Callable[..., tp.Any]) -> None:
    x = np.random.normal(0, 1, 10)
    outputs = [func(x) for _ in range(2)]
    np.testing.assert_equal(outputs[0], outputs[1], f"Function {name} is not deterministic")
    assert isinstance(outputs[0], float)


@testing.parametrized(
    sphere=("sphere", [0.0, 0.0], 0.0),
    sphere1=("sphere1", [1.0, 1.0], 0.0),
    ellipsoid=("ellipsoid", [0.0, 1.0], 1e6),
    rastrigin=("rastrigin", [0.0, 0.0, 0.0], 0.0),
    negsphere=("negsphere", [1.0, 2.0], -5.0),
    rosenbrock=("rosenbrock", [1.0, 1.0, 1.0], 0.0),
    plateaus=("plateaus", [0.04, -0.96], 1.0),
)
def test_known_values(name: str, x: tp.List[float], expected: float) -> None:
    np.testing.assert_almost_equal(corefuncs.registry[name](np.array(x)), expected)
