# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

# base classes


class AnnealError(Exception):
    """Base class for error raised by asanneal"""


class AnnealWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class AnnealEarlyStopping(StopIteration, AnnealError):
    """Stops the minimization loop if raised"""


class AnnealRuntimeError(RuntimeError, AnnealError):
    """Runtime error raised by asanneal"""


class AnnealTypeError(TypeError, AnnealError):
    """Type error raised by asanneal"""


class AnnealValueError(ValueError, AnnealError):
    """Value error raised by asanneal"""


class ProtocolViolationError(AnnealRuntimeError):
    """The caller did not perform the action requested by the annealer state
    (e.g.: stepping before init, or without providing the requested objective values)
    """


class NonFiniteTangentError(AnnealRuntimeError):
    """Tangents of the objective computed while reannealing are NaN or infinite"""


class ResamplingError(AnnealRuntimeError):
    """No candidate within bounds could be drawn in the allowed number of trials"""


# warnings


class AnnealRuntimeWarning(RuntimeWarning, AnnealWarning):
    """Runtime warning raised by asanneal"""


class BadObjectiveWarning(AnnealRuntimeWarning):
    """Provided objective value is unhelpful"""


class DegenerateBoundsWarning(AnnealRuntimeWarning):
    """Some parameter range collapses to a single value"""
