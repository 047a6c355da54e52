# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Adaptive simulated annealing, following Lester Ingber's Very Fast Simulated
Re-Annealing schedule:

Ingber, L. (1989). Very fast simulated re-annealing. Mathematical and Computer
Modelling 12, 967-973.
"""

import pickle
import logging
import warnings
from enum import Enum
from numbers import Real
from pathlib import Path
import numpy as np
import asanneal.common.typing as tp
from asanneal.common import errors
from . import utils
from .history import History


logger = logging.getLogger(__name__)

_EPS = float(np.finfo(float).eps)
X = tp.TypeVar("X", bound="Annealer")
_AnnealCallBack = tp.Union[tp.Callable[["Annealer"], None], tp.Callable[["Annealer", np.ndarray], None]]

# names of the points the client code can be asked to evaluate
CANDIDATE = "x_cand"
CURRENT = "x"
PLUSDELTA = "x_plusdelta"
TARGETS = (CANDIDATE, CURRENT, PLUSDELTA)
_OBJECTIVES = {CANDIDATE: "f_x_cand", CURRENT: "f_x", PLUSDELTA: "f_x_plusdelta"}


class AnnealState(Enum):
    """What the client code of an Annealer must do next"""

    UNKNOWN = 0
    NEED_TO_INIT = 1  # call init()
    NEED_TO_STEP = 2  # call step()
    NEED_TO_COMPUTE = 3  # compute the objective of x_cand, then call step()
    NEED_TO_COMPUTE_SET = 4  # compute the objectives of the reannealing set, then call step()
    READY_TO_STOP = 5  # the algorithm has finished


class Request(tp.NamedTuple):
    """State of the annealer, along with the points the client code must evaluate
    before the next call to :code:`step` (keys are in :code:`TARGETS`)
    """

    state: AnnealState
    evaluations: tp.Dict[str, np.ndarray]

    @property
    def done(self) -> bool:
        return self.state == AnnealState.READY_TO_STOP


def load(cls: tp.Type[X], filepath: tp.PathLike) -> X:
    """Loads a pickle file and checks that it contains an annealer."""
    filepath = Path(filepath)
    with filepath.open("rb") as f:
        annealer = pickle.load(f)
    assert isinstance(annealer, cls), f"You should only load {cls} with this method (found {type(annealer)})"
    return annealer


class Annealer:  # pylint: disable=too-many-instance-attributes
    """Adaptive simulated annealing, driven by the client code.

    The client code creates an Annealer, sets its parameters, calls :code:`init()` and
    then runs a loop, checking :code:`state` to know what to compute next:

    - :code:`NEED_TO_COMPUTE`: evaluate the objective at :code:`x_cand` and store it in
      :code:`f_x_cand`,
    - :code:`NEED_TO_COMPUTE_SET` (reannealing): evaluate the objective at :code:`x_plusdelta`
      and (unless :code:`recompute_reanneal_objective` is False) at :code:`x`, and store them
      in :code:`f_x_plusdelta` and :code:`f_x`,

    then call :code:`step()`, until the state is :code:`READY_TO_STOP`. Alternatively,
    :code:`init()` and :code:`step(results)` return a :code:`Request` holding the points to
    evaluate, and :code:`step` accepts the results as a dict with the same keys.

    Parameters
    ----------
    initial_params: array-like
        initial parameters (D values)
    param_ranges: sequence of pairs
        the (min, max) range of each of the D parameters
    history_size: int or None
        maximum number of accepted (and of rejected) parameters kept in the history,
        everything is kept if None
    max_resample_trials: int
        maximum number of draws for finding a candidate within the parameter ranges

    Note
    ----
    Algorithm parameters (:code:`downhill`, :code:`temperature_ratio_scale`,
    :code:`temperature_anneal_scale`, :code:`cost_parameter_scale_ratio`,
    :code:`acc_gen_reanneal_ratio`, :code:`delta_param`, :code:`f_x_best_repeat_max`,
    :code:`enable_reanneal`, :code:`reanneal_after_steps`, :code:`exit_at_T_f` and
    :code:`recompute_reanneal_objective`) are attributes which must be set before
    calling :code:`init()`.
    """

    # pylint: disable=too-many-statements
    def __init__(
        self,
        initial_params: tp.ArrayLike,
        param_ranges: tp.Bounds,
        *,
        history_size: tp.Optional[int] = None,
        max_resample_trials: int = 10000,
    ) -> None:
        x0 = np.array(initial_params, dtype=float)
        if x0.ndim != 1 or not x0.size:
            raise errors.AnnealValueError(f"Initial parameters must be a non-empty 1d sequence (got shape {x0.shape})")
        self.range_min, self.range_max = utils.as_bounds(param_ranges, x0.size)
        outside = np.nonzero((x0 < self.range_min) | (x0 > self.range_max))[0]
        if outside.size:
            raise errors.AnnealValueError(
                f"Initial parameters {x0.tolist()} are outside of their range for dimension(s) {outside.tolist()}"
            )
        if max_resample_trials < 1:
            raise errors.AnnealValueError(f"max_resample_trials must be positive (got {max_resample_trials})")
        self._fixed = self.range_min == self.range_max
        if np.any(self._fixed):
            warnings.warn(
                f"Ranges of dimension(s) {np.nonzero(self._fixed)[0].tolist()} collapse to a single value, "
                "these parameters will not be optimized.",
                errors.DegenerateBoundsWarning,
            )
        self.max_resample_trials = int(max_resample_trials)
        # algorithm parameters, to be adjusted before calling init()
        self.downhill = True  # descend to the minimum (or ascend to the maximum if False)
        self.temperature_ratio_scale = 1e-5  # m = -log(temperature_ratio_scale)
        self.temperature_anneal_scale = 100.0  # n = log(temperature_anneal_scale)
        self.cost_parameter_scale_ratio = 1.0  # used to compute T_cost
        self.acc_gen_reanneal_ratio = 1e-6  # reanneal if accepted vs generated is lower
        self.delta_param = 0.01  # tangents are computed at (1 +/- delta_param) * x
        self.f_x_best_repeat_max = 10  # stop once the best objective was accepted this many times
        self.enable_reanneal = True
        self.reanneal_after_steps = 100  # force reannealing after this many steps
        self.exit_at_T_f = False  # stop when T_k reaches T_f
        self.recompute_reanneal_objective = True  # if False, f_x_best is reused when reannealing
        self.param_names: tp.List[str] = []
        # parameters and objectives
        self.x = x0.copy()
        self.x_cand = x0.copy()
        self.x_best = x0.copy()
        self.x_plusdelta = x0.copy()
        self._f_x = 0.0
        self._f_x_cand = 0.0
        self._f_x_plusdelta = 0.0
        self.f_x_best = 0.0
        self.f_x_best_repeats = 0
        # statistics
        self.num_improved = 0
        self.num_worse = 0
        self.num_worse_accepted = 0
        self.num_accepted = 0  # k_cost in the papers
        self.steps = 0
        self.last_reanneal_steps = 0
        self.history = History(self.dimension, max_size=history_size)
        # internal algorithm parameters, computed in init()
        dim = self.dimension
        self.k = 1
        self.k_f = 0
        self.k_r = 0  # steps since last reanneal
        self.T_k = np.ones(dim)
        self.T_0 = np.ones(dim)
        self.T_f = np.ones(dim)
        self.m = np.zeros(dim)
        self.n = np.zeros(dim)
        self.c = np.ones(dim)
        self.c_cost = np.ones(dim)
        self.T_cost_0 = np.ones(dim)
        self.T_cost = np.ones(dim)
        self.tangents = np.ones(dim)
        # instance state
        self._requested: tp.Tuple[str, ...] = ()
        self._pending: tp.Set[str] = set()
        self._callbacks: tp.Dict[str, tp.List[tp.Any]] = {}
        self._random_state: tp.Optional[np.random.RandomState] = None
        self.state = AnnealState.NEED_TO_INIT

    @property
    def dimension(self) -> int:
        """int: Dimension of the optimization space."""
        return self.range_min.size

    @property
    def random_state(self) -> np.random.RandomState:
        """Random state candidate generation and acceptance pull from.
        It can be seeded/replaced.
        """
        if self._random_state is None:
            seed = np.random.randint(2 ** 32, dtype=np.uint32)
            self._random_state = np.random.RandomState(seed)
        return self._random_state

    @random_state.setter
    def random_state(self, random_state: np.random.RandomState) -> None:
        self._random_state = random_state

    # objectives provided by the client code

    @property
    def f_x(self) -> float:
        """Objective of the current parameters x"""
        return self._f_x

    @f_x.setter
    def f_x(self, value: float) -> None:
        self._f_x = self._check_objective(value, CURRENT)

    @property
    def f_x_cand(self) -> float:
        """Objective of the candidate parameters x_cand"""
        return self._f_x_cand

    @f_x_cand.setter
    def f_x_cand(self, value: float) -> None:
        self._f_x_cand = self._check_objective(value, CANDIDATE)

    @property
    def f_x_plusdelta(self) -> float:
        """Objective of the perturbed parameters x_plusdelta (reannealing only)"""
        return self._f_x_plusdelta

    @f_x_plusdelta.setter
    def f_x_plusdelta(self, value: float) -> None:
        self._f_x_plusdelta = self._check_objective(value, PLUSDELTA)

    def _check_objective(self, value: tp.Any, target: str) -> float:
        if target not in self._requested:
            raise errors.ProtocolViolationError(
                f"Objective for {target} was not requested in state {self.state.name} (requested: {list(self._requested)})"
            )
        if not isinstance(value, (Real, float)):
            raise errors.AnnealTypeError(
                f"Objective values must be real numbers but the value for {target} was: {value} (type: {type(value)})."
            )
        value = float(value)
        if np.isnan(value):
            warnings.warn(f"Providing objective {value} for {target}", errors.BadObjectiveWarning)
        self._pending.discard(target)
        return value

    def tell(self, results: tp.Mapping[str, float]) -> None:
        """Provides the objective values requested by the current state.

        Parameters
        ----------
        results: dict
            objective values, with the keys of :code:`request.evaluations`
            (:code:`"x_cand"`, :code:`"x"` or :code:`"x_plusdelta"`)
        """
        unexpected = set(results) - set(self._requested)
        if unexpected:
            raise errors.ProtocolViolationError(
                f"Objective(s) for {sorted(unexpected)} were not requested in state {self.state.name} "
                f"(requested: {list(self._requested)})"
            )
        for target, value in results.items():
            setattr(self, _OBJECTIVES[target], value)

    @property
    def request(self) -> Request:
        """Current state and points to be evaluated by the client code"""
        return Request(self.state, {name: np.array(getattr(self, name)) for name in self._requested})

    def _set_state(self, state: AnnealState, requested: tp.Tuple[str, ...] = ()) -> None:
        self.state = state
        self._requested = requested
        self._pending = set(requested)

    def __repr__(self) -> str:
        return (f"Instance of {self.__class__.__name__}(dimension={self.dimension}, downhill={self.downhill}, "
                f"state={self.state.name}, steps={self.steps})")

    def register_callback(self, name: str, callback: _AnnealCallBack) -> None:
        """Add a callback method called after each :code:`step` (with the annealer as argument),
        or after each completed reannealing (with the annealer and the tangents as arguments).
        This can be useful for custom logging.

        Parameters
        ----------
        name: str
            name of the event to register the callback for (either :code:`step` or :code:`reanneal`)
        callback: callable
            a callable taking the arguments of the event
        """
        assert name in ["step", "reanneal"], f'Only "step" and "reanneal" events can have callbacks (not {name})'
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def dump(self, filepath: tp.PathLike) -> None:
        """Pickles the annealer into a file."""
        filepath = Path(filepath)
        with filepath.open("wb") as f:
            pickle.dump(self, f)

    @classmethod
    def load(cls: tp.Type[X], filepath: tp.PathLike) -> X:
        """Loads a pickle and checks that the class is correct."""
        return load(cls, filepath)

    def save(self, filepath: tp.PathLike) -> None:
        """Saves the accepted and rejected parameters with their objectives, the best
        parameters, their objective and the parameter names into a .npz file
        (see :code:`asanneal.load_history`)
        """
        self.history.save(filepath, x_best=self.x_best, f_x_best=self.f_x_best, param_names=self.param_names)

    def recommend(self) -> np.ndarray:
        """Provides the best parameters found so far"""
        return np.array(self.x_best)

    # main protocol

    def init(self) -> Request:
        """Computes the internal parameters of the algorithm, once the algorithm
        parameters are set. The client code must then compute the objective at
        the initial parameters (:code:`x_cand`).
        """
        if self.state != AnnealState.NEED_TO_INIT:
            raise errors.ProtocolViolationError(f"init() must be called once, after construction (state is {self.state.name})")
        if not 0 < self.temperature_ratio_scale < 1:
            raise errors.AnnealValueError(
                f"temperature_ratio_scale must be in (0, 1) for T_f to be lower than T_0 (got {self.temperature_ratio_scale})"
            )
        if self.temperature_anneal_scale <= 0 or self.cost_parameter_scale_ratio <= 0:
            raise errors.AnnealValueError(
                "temperature_anneal_scale and cost_parameter_scale_ratio must be strictly positive "
                f"(got {self.temperature_anneal_scale} and {self.cost_parameter_scale_ratio})"
            )
        dim = self.dimension
        worst = float("inf") if self.downhill else -float("inf")
        self.f_x_best = self._f_x = self._f_x_cand = worst
        self.T_0 = np.ones(dim)
        self.T_k = np.ones(dim)
        self.m = np.full(dim, -np.log(self.temperature_ratio_scale))
        self.n = np.full(dim, np.log(self.temperature_anneal_scale))
        self.c = self.m * np.exp(-self.n / dim)  # control parameter
        self.T_f = self.T_0 * np.exp(-self.m)
        self.k_f = int(np.mean(np.exp(self.n)))
        self.tangents = np.ones(dim)
        self.c_cost = self.c * self.cost_parameter_scale_ratio
        self.T_cost_0 = self.c_cost.copy()
        self.T_cost = self.c_cost.copy()
        logger.info("Initialized annealing in dimension %s (c=%s, T_f=%s, expected final step k_f=%s)",
                    dim, self.c[0], self.T_f[0], self.k_f)
        self._set_state(AnnealState.NEED_TO_COMPUTE, (CANDIDATE,))
        return self.request

    def step(self, results: tp.Optional[tp.Mapping[str, float]] = None) -> Request:
        """Advances the annealing by one step.

        Parameters
        ----------
        results: dict (optional)
            objective values requested by the current state (see :code:`tell`), if they were
            not directly set on the :code:`f_x_cand`, :code:`f_x` and :code:`f_x_plusdelta` attributes

        Returns
        -------
        Request
            the new state and the points to evaluate before the next step

        Note
        ----
        If the step fails with an :code:`AnnealRuntimeError` (eg: no candidate could be drawn
        within the ranges), the state becomes :code:`UNKNOWN` and the annealer cannot be stepped anymore.
        """
        if self.state == AnnealState.NEED_TO_INIT:
            raise errors.ProtocolViolationError("init() must be called before step()")
        if self.state == AnnealState.UNKNOWN:
            raise errors.ProtocolViolationError("The annealer is in an unknown state (after a failure), it cannot be stepped")
        if self.state == AnnealState.READY_TO_STOP:
            raise errors.ProtocolViolationError("The annealing has finished, step() must not be called anymore")
        if results is not None:
            self.tell(results)
        if self._pending:
            missing = [_OBJECTIVES[name] for name in self._requested if name in self._pending]
            raise errors.ProtocolViolationError(f"Missing objective value(s) {missing} required in state {self.state.name}")
        try:
            self._advance()
        except errors.AnnealRuntimeError:
            self._set_state(AnnealState.UNKNOWN)
            raise
        self._call_step_callbacks()
        return self.request

    def _advance(self) -> None:
        self.steps += 1
        reason = self._stop_check()
        if reason is not None:
            logger.info("Stopping at step %s since %s (best objective: %s)", self.steps, reason, self.f_x_best)
            self._set_state(AnnealState.READY_TO_STOP)
            return
        reannealing = self.state == AnnealState.NEED_TO_COMPUTE_SET
        if reannealing:
            self._complete_reanneal()
            self._set_state(AnnealState.NEED_TO_STEP)
        self._cooling_schedule()
        if not reannealing:  # x_cand is x itself while reannealing, there is nothing to judge
            self._acceptance_check()
        self._generate_next()
        self.k += 1
        self.k_r += 1
        if self.enable_reanneal and self._reanneal_test():
            requested = (PLUSDELTA,) + ((CURRENT,) if self.recompute_reanneal_objective else ())
            self._set_state(AnnealState.NEED_TO_COMPUTE_SET, requested)
        else:
            self._set_state(AnnealState.NEED_TO_COMPUTE, (CANDIDATE,))

    def _call_step_callbacks(self) -> None:
        for callback in self._callbacks.get("step", []):
            callback(self)

    def minimize(
        self,
        objective_function: tp.ObjectiveFunction,
        executor: tp.Optional[tp.ExecutorLike] = None,
        max_steps: tp.Optional[int] = None,
    ) -> np.ndarray:
        """Runs the annealing loop on a callable (minimizing it, or maximizing it
        if :code:`downhill` is False)

        Parameters
        ----------
        objective_function: callable
            function of the parameters (as a np.ndarray) returning a float
        executor: Executor
            An executor object, with method :code:`submit(callable, *args, **kwargs)` and returning a Future-like object
            with method :code:`result() -> float`. The points requested at once (when reannealing) are all
            submitted before waiting for their results, so that they can be computed in parallel.
            Eg: :code:`concurrent.futures.ThreadPoolExecutor`
        max_steps: int (optional)
            maximum number of calls to :code:`step`

        Returns
        -------
        np.ndarray
            the best parameters
        """
        if executor is None:
            executor = utils.SequentialExecutor()  # defaults to run everything locally and sequentially
        request = self.init() if self.state == AnnealState.NEED_TO_INIT else self.request
        num_steps = 0
        while not request.done:
            if max_steps is not None and num_steps >= max_steps:
                logger.info("Reached the maximum number of steps (%s)", max_steps)
                break
            jobs = {name: executor.submit(objective_function, x) for name, x in request.evaluations.items()}
            results = {name: job.result() for name, job in jobs.items()}
            try:
                request = self.step(results)
            except errors.AnnealEarlyStopping as e:
                logger.info("Early stopping at step %s: %s", self.steps, e)
                break
            num_steps += 1
        return self.recommend()

    # internal algorithm methods

    def is_better(self, value: float, reference: float) -> bool:
        """Whether an objective value is better than a reference, given the direction of the annealing"""
        return value < reference if self.downhill else value > reference

    def _cooling_schedule(self) -> None:
        """Updates the generating temperatures T_k from the step count k, and the
        acceptance temperatures T_cost from the number of accepted points
        """
        exponent = 1.0 / self.dimension
        self.T_k = self.T_0 * np.exp(-self.c * self.k ** exponent)
        self.T_cost = self.T_cost_0 * np.exp(-self.c_cost * self.num_accepted ** exponent)
        logger.debug("T_i(k=%s[%s]) = %s [T_f=%s]; T_cost(n_acc=%s) = %s",
                     self.k, self.k_f, self.T_k[0], self.T_f[0], self.num_accepted, self.T_cost[0])

    def _acceptance_check(self) -> None:
        """Accepts (or not) x_cand as new x, and updates x_best and the statistics"""
        candidate_is_better = self.is_better(self._f_x_cand, self._f_x)
        if candidate_is_better:
            self.num_improved += 1
        else:
            self.num_worse += 1
        worsening = self._f_x_cand - self._f_x if self.downhill else self._f_x - self._f_x_cand
        with np.errstate(invalid="ignore", over="ignore"):
            # improvements always go through (p = 1), and NaN objectives never do
            p = float(np.exp(np.minimum(0.0, -worsening / (_EPS + np.mean(self.T_cost)))))
        accepted = p > self.random_state.uniform()
        if accepted and not candidate_is_better:
            self.num_worse_accepted += 1
        if accepted:
            self.x = self.x_cand.copy()
            self._f_x = self._f_x_cand
            self.history.add_accepted(self.x, self._f_x)
            if self._f_x_cand == self.f_x_best:
                self.f_x_best_repeats += 1
            elif self.is_better(self._f_x_cand, self.f_x_best):
                self.f_x_best_repeats = 0
                self.x_best = self.x_cand.copy()
                self.f_x_best = self._f_x_cand
            self.num_accepted += 1
        else:
            self.history.add_rejected(self.x, self._f_x)

    def _sample_candidate(self, x: np.ndarray) -> np.ndarray:
        """Draws a point around x following the generating distribution, until it
        falls within the parameter ranges
        """
        for _ in range(self.max_resample_trials):
            u = self.random_state.uniform(size=self.dimension)
            u2 = np.abs(2 * u - 1)
            sign = np.sign(u - 0.5)
            with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
                y = sign * self.T_k * ((1.0 + 1.0 / self.T_k) ** u2 - 1.0)
            y[self._fixed] = 0.0
            x_new = x + y
            if np.all(x_new <= self.range_max) and np.all(x_new >= self.range_min):
                return x_new
        raise errors.ResamplingError(
            f"Could not draw a candidate within the parameter ranges in {self.max_resample_trials} trials "
            f"(T_k={self.T_k.tolist()})"
        )

    def _generate_next(self) -> None:
        self.x_cand = self._sample_candidate(self.x)

    def _generate_delta_parameter(self, x_start: np.ndarray) -> np.ndarray:
        """Perturbs x_start into x_start * (1 +/- delta_param) for estimating the
        tangents of the objective function
        """
        plusminus = np.ones(self.dimension)
        x_new = x_start * (1.0 + self.delta_param)
        plusminus[(x_new > self.range_max) | (x_new < self.range_min)] = -1.0
        x_new = x_start * (1.0 + plusminus * self.delta_param)
        # very narrow ranges may not fit any of both
        return np.clip(x_new, self.range_min, self.range_max)

    def _reanneal_test(self) -> bool:
        """Checks whether reannealing is needed, and if so, moves back to the best
        parameters and prepares the set of parameters the client code must evaluate
        """
        if self.steps - self.last_reanneal_steps < 10:
            return False
        if self.k_r < self.reanneal_after_steps and self.accepted_vs_generated() >= self.acc_gen_reanneal_ratio:
            return False
        self.x = self.x_best.copy()
        self._f_x = self.f_x_best
        self.x_plusdelta = self._generate_delta_parameter(self.x)
        self.x_cand = self.x.copy()
        self._f_x_cand = self._f_x
        logger.info("Reannealing at step %s (k_r=%s, accepted vs generated=%s)",
                    self.steps, self.k_r, self.accepted_vs_generated())
        return True

    def _complete_reanneal(self) -> None:
        """Rescales the temperatures T_k and the step count k according to the
        tangents of the objective function at x (from f_x and f_x_plusdelta).
        Pinned parameters (collapsed ranges) have a zero tangent and keep their temperature.
        """
        self.last_reanneal_steps = self.steps
        free = ~self._fixed
        if not np.any(free):
            return
        tangents = np.zeros(self.dimension)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            tangents[free] = (self._f_x_plusdelta - self._f_x) / (self.x_plusdelta[free] - self.x[free] + _EPS)
        self.tangents = tangents
        if not np.all(np.isfinite(tangents)):
            raise errors.NonFiniteTangentError(f"NaN or inf in tangents: {tangents.tolist()}")
        if np.any(tangents[free] == 0):
            # delta_param was not sufficient to change the objective function
            logger.info("Tangents had a zero, so doubling delta_param from %s to %s", self.delta_param, 2 * self.delta_param)
            self.delta_param *= 2.0
            return
        max_tangent = np.max(np.abs(tangents[free]))
        T_re = self.T_k.copy()
        T_re[free] = np.abs(self.T_k[free] * (max_tangent / tangents[free]))
        if not np.all((T_re > 0) & np.isfinite(T_re)):
            raise errors.AnnealRuntimeError(
                f"Can't update k based on new temperatures {T_re.tolist()}, as some are not strictly positive"
            )
        k_re = np.mean((np.log(self.T_0[free] / T_re[free]) / self.c[free]) ** self.dimension)
        k_re = max(1, int(k_re))  # temperatures above T_0 would give a step count below 1
        logger.info("Reannealed: T_i(k) %.5g --> %.5g and k: %s --> %s", np.mean(self.T_k), np.mean(T_re), self.k, k_re)
        self.k = k_re
        self.T_k = T_re
        self.reset_stats()
        for callback in self._callbacks.get("reanneal", []):
            callback(self, tangents.copy())

    def _stop_check(self) -> tp.Optional[str]:
        """Returns the reason for stopping if the algorithm has finished, None otherwise"""
        if self.exit_at_T_f and np.all(self.T_k < self.T_f):
            return "T_k reached T_f"
        if self.T_k[0] <= _EPS:
            return "T_k reached 0"
        if self.T_cost[0] <= _EPS:
            return "T_cost reached 0"
        if self.f_x_best_repeats >= self.f_x_best_repeat_max:
            return f"the best objective was repeated {self.f_x_best_repeats} times"
        return None

    def accepted_vs_generated(self) -> float:
        """Number of accepted parameters vs number of generated ones, since the last reannealing"""
        generated = self.num_improved + self.num_worse
        return self.num_accepted / generated if generated else 1.0

    def reset_stats(self) -> None:
        """Resets the statistics of accepted and generated parameters (after reannealing)"""
        self.num_improved = 0
        self.num_worse = 0
        self.num_worse_accepted = 0
        self.num_accepted = 0
        self.k_r = 0
