# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Callbacks to register on an annealer through :code:`annealer.register_callback(event, callback)`.

"step" callbacks are called with the annealer after each step, "reanneal"
callbacks with the annealer and the tangents after each completed reannealing.
"""

import json
import time
import warnings
import datetime
import logging
from pathlib import Path
import numpy as np
import asanneal.common.typing as tp
from asanneal.common import errors
from . import annealer as anl

global_logger = logging.getLogger(__name__)


class AnnealLogger:
    """"step" callback logging the progress of the annealing, at most every
    log_interval_steps steps, and at least every log_interval_seconds seconds.

    Parameters
    ----------
    logger: logging.Logger
        the logger to write to (defaults to this module's logger)
    log_level: int
        level of the records
    log_interval_steps: int
        number of steps between two records
    log_interval_seconds: float
        time after which a record is written even if log_interval_steps was not reached
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        log_interval_steps: int = 1,
        log_interval_seconds: float = 60.0,
    ) -> None:
        if log_interval_steps < 1 or log_interval_seconds <= 0:
            raise errors.AnnealValueError("Logging intervals must be strictly positive")
        self._logger = logger
        self._log_level = log_level
        self._interval_steps = int(log_interval_steps)
        self._interval_seconds = log_interval_seconds
        self._next_step = self._interval_steps
        self._deadline = time.time() + log_interval_seconds

    def __call__(self, annealer: anl.Annealer) -> None:
        now = time.time()
        if annealer.steps < self._next_step and now < self._deadline:
            return
        self._next_step = annealer.steps + self._interval_steps
        self._deadline = now + self._interval_seconds
        self._logger.log(
            self._log_level,
            "After %s steps (state %s), best objective is %s at %s",
            annealer.steps,
            annealer.state.name,
            annealer.f_x_best,
            annealer.x_best,
        )


class ReannealLogger:
    """"reanneal" callback logging the tangents and the rescaled temperatures"""

    def __init__(self, *, logger: logging.Logger = global_logger, log_level: int = logging.INFO) -> None:
        self._logger = logger
        self._log_level = log_level

    def __call__(self, annealer: anl.Annealer, tangents: np.ndarray) -> None:
        self._logger.log(
            self._log_level,
            "Reannealed at step %s: tangents %s, temperatures %s, k=%s",
            annealer.steps,
            tangents.tolist(),
            annealer.T_k.tolist(),
            annealer.k,
        )


class ParametersLogger:
    """"step" callback appending the state of the annealer to a file, as one json
    object per line.

    Parameters
    ----------
    filepath: str or pathlib.Path
        the file to write to
    append: bool
        if False, an existing file is removed first

    Example
    -------

    .. code-block:: python

        logger = ParametersLogger(filepath)
        annealer.register_callback("step", logger)
        annealer.minimize(func)
        records = logger.load()

    Note
    ----
    Current parameters are recorded under their names (or their index if the annealer
    has no param_names), statistics under keys starting with "#".
    """

    def __init__(self, filepath: tp.PathLike, append: bool = True) -> None:
        self._session = datetime.datetime.now().strftime("%y-%m-%d %H:%M:%S")
        self._filepath = Path(filepath)
        if not append and self._filepath.exists():
            self._filepath.unlink()
        self._filepath.parent.mkdir(exist_ok=True, parents=True)

    def __call__(self, annealer: anl.Annealer) -> None:
        record: tp.Dict[str, tp.Any] = {
            "#session": self._session,
            "#step": annealer.steps,
            "#state": annealer.state.name,
            "#k": annealer.k,
            "#num-accepted": annealer.num_accepted,
            "#accepted-vs-generated": annealer.accepted_vs_generated(),
            "#T_k": float(np.mean(annealer.T_k)),
            "#T_cost": float(np.mean(annealer.T_cost)),
            "#f_x": annealer.f_x,
            "#f_x_best": annealer.f_x_best,
        }
        names = annealer.param_names or [str(k) for k in range(annealer.dimension)]
        record.update(zip(names, annealer.x.tolist()))
        record["#x_best"] = annealer.x_best.tolist()
        try:  # logging must not interrupt the annealing
            with self._filepath.open("a") as f:
                f.write(json.dumps(record) + "\n")
        except (OSError, TypeError, ValueError) as e:
            warnings.warn(f"Could not log the parameters to {self._filepath}: {e}", errors.AnnealRuntimeWarning)

    def load(self) -> tp.List[tp.Dict[str, tp.Any]]:
        """Reads all the records of the file"""
        if not self._filepath.exists():
            return []
        with self._filepath.open("r") as f:
            return [json.loads(line) for line in f if line.strip()]


class AnnealerDump:
    """Pickles the annealer into a file each time it is called (on any event), so
    that a run can be resumed with :code:`Annealer.load`.
    """

    def __init__(self, filepath: tp.PathLike) -> None:
        self._filepath = Path(filepath)

    def __call__(self, annealer: anl.Annealer, *args: tp.Any, **kwargs: tp.Any) -> None:
        annealer.dump(self._filepath)


class EarlyStopping:
    """"step" callback interrupting :code:`minimize` once a criterion is met.

    Parameters
    ----------
    stopping_criterion: func(annealer) -> bool
        returns True when the minimization must be stopped

    Example
    -------
    Stopping after the 4th step:

    >>> annealer.register_callback("step", asanneal.callbacks.EarlyStopping(lambda ann: ann.steps > 3))
    >>> annealer.minimize(func)

    Stopping as soon as the best objective is below 12:

    >>> early_stopping = asanneal.callbacks.EarlyStopping(lambda ann: ann.f_x_best < 12)
    """

    def __init__(self, stopping_criterion: tp.Callable[[anl.Annealer], bool]) -> None:
        self.stopping_criterion = stopping_criterion

    def __call__(self, annealer: anl.Annealer, *args: tp.Any, **kwargs: tp.Any) -> None:
        if args or kwargs:
            raise errors.AnnealRuntimeError("EarlyStopping must be registered on the step event")
        if self.stopping_criterion(annealer):
            raise errors.AnnealEarlyStopping(f"Early stopping criterion reached at step {annealer.steps}")

    @classmethod
    def timer(cls, max_duration: float) -> "EarlyStopping":
        """Stops once max_duration seconds elapsed since the first step"""
        return cls(_DurationCriterion(max_duration))

    @classmethod
    def no_improvement_stopper(cls, tolerance_window: int) -> "EarlyStopping":
        """Stops once the best objective did not improve for more than tolerance_window steps"""
        return cls(_ImprovementToleranceCriterion(tolerance_window))


class _DurationCriterion:
    def __init__(self, max_duration: float) -> None:
        self._max_duration = max_duration
        self._start: tp.Optional[float] = None

    def __call__(self, annealer: anl.Annealer) -> bool:
        if self._start is None:
            self._start = time.time()
        return time.time() - self._start > self._max_duration


class _ImprovementToleranceCriterion:
    def __init__(self, tolerance_window: int) -> None:
        self._tolerance_window = tolerance_window
        self._best: tp.Optional[float] = None
        self._count = 0

    def __call__(self, annealer: anl.Annealer) -> bool:
        best = annealer.f_x_best
        if self._best is None or annealer.is_better(best, self._best):
            self._best = best
            self._count = 0
            return False
        self._count += 1
        return self._count > self._tolerance_window
