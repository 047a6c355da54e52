# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import asanneal.common.typing as tp
from asanneal.common.decorators import Registry


registry: Registry[tp.ObjectiveFunction] = Registry()


@registry.register
def sphere(x: np.ndarray) -> float:
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""
    x = np.asarray(x, dtype=float)
    assert x.ndim == 1
    return float(x.dot(x))


@registry.register
def sphere1(x: np.ndarray) -> float:
    """Translated sphere function."""
    return sphere(np.asarray(x) - 1.0)


@registry.register
def ellipsoid(x: np.ndarray) -> float:
    """Classical example of ill conditioned function.

    Parameters have very different sensitivities, which is what reannealing
    compensates for.
    """
    x = np.asarray(x, dtype=float)
    weights = 10 ** np.linspace(0, 6, x.size)
    return float(weights.dot(x ** 2))


@registry.register
def rastrigin(x: np.ndarray) -> float:
    """Classical multimodal function."""
    x = np.asarray(x, dtype=float)
    cosi = float(np.sum(np.cos(2 * np.pi * x)))
    return float(10 * (len(x) - cosi) + sphere(x))


@registry.register
def negsphere(x: np.ndarray) -> float:
    """Opposite of the sphere function, for maximization."""
    return -sphere(x)


@registry.register
def rosenbrock(x: np.ndarray) -> float:
    """Curved valley, with its minimum at (1, ..., 1)."""
    x = np.asarray(x, dtype=float)
    return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))


@registry.register
def plateaus(x: np.ndarray) -> float:
    """Piecewise constant sphere: small perturbations of the parameters often
    leave the objective unchanged (zero tangents).
    """
    return sphere(np.floor(np.asarray(x, dtype=float) * 10.0 + 0.5) / 10.0)
