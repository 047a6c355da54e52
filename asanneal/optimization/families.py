# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.
"""Configured families of annealers, and their registry of named presets.

A configuration can also be written to, and read from, a json file, so that the
parameters used for a run can be recorded along with its results.
"""
import json
from pathlib import Path
import asanneal.common.typing as tp
from asanneal.common import errors
from asanneal.common import tools as astools
from asanneal.common.decorators import Registry
from .annealer import Annealer


# algorithm parameters which are set as attributes of the annealer before init()
_ATTRIBUTES = (
    "downhill",
    "temperature_ratio_scale",
    "temperature_anneal_scale",
    "cost_parameter_scale_ratio",
    "acc_gen_reanneal_ratio",
    "delta_param",
    "f_x_best_repeat_max",
    "enable_reanneal",
    "reanneal_after_steps",
    "exit_at_T_f",
    "recompute_reanneal_objective",
)


class ParametrizedAnnealer:
    """Creates annealers with a given configuration.

    Parameters
    ----------
    downhill: bool
        whether to minimize (True) or to maximize (False) the objective
    temperature_ratio_scale: float
        Lester Ingber's Temperature_Ratio_Scale, in (0, 1): ratio between final and initial temperatures
    temperature_anneal_scale: float
        Lester Ingber's Temperature_Anneal_Scale: expected number of steps of the annealing
    cost_parameter_scale_ratio: float
        Lester Ingber's Cost_Parameter_Scale_Ratio: scale of the acceptance temperature
        with respect to the generating temperatures
    acc_gen_reanneal_ratio: float
        reanneal if the ratio of accepted vs generated parameters is lower than this
    delta_param: float
        relative perturbation used to estimate the tangents of the objective when reannealing
    f_x_best_repeat_max: int
        stop once the best objective has been accepted this many times
    enable_reanneal: bool
        whether to reanneal at all
    reanneal_after_steps: int
        reanneal if this many steps happened since the last reannealing
    exit_at_T_f: bool
        stop when all the generating temperatures reached their expected final value
    recompute_reanneal_objective: bool
        whether to request a fresh evaluation of the best parameters when reannealing
        (the best objective is reused otherwise)
    history_size: int or None
        maximum number of accepted (and of rejected) parameters kept in the history
    max_resample_trials: int
        maximum number of draws for finding a candidate within the parameter ranges

    Note
    ----
    This provides a default repr which can be bypassed through set_name
    """

    # pylint: disable=unused-argument,too-many-arguments
    def __init__(
        self,
        *,
        downhill: bool = True,
        temperature_ratio_scale: float = 1e-5,
        temperature_anneal_scale: float = 100.0,
        cost_parameter_scale_ratio: float = 1.0,
        acc_gen_reanneal_ratio: float = 1e-6,
        delta_param: float = 0.01,
        f_x_best_repeat_max: int = 10,
        enable_reanneal: bool = True,
        reanneal_after_steps: int = 100,
        exit_at_T_f: bool = False,
        recompute_reanneal_objective: bool = True,
        history_size: tp.Optional[int] = None,
        max_resample_trials: int = 10000,
    ) -> None:
        config = dict(locals())
        config.pop("self", None)  # self comes from "locals()"
        config.pop("__class__", None)
        self._config = config
        diff = astools.different_from_defaults(self.__class__, config, check_mismatches=True)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self.name = f"{self.__class__.__name__}({params})"
        # try instantiating for init checks
        self([0.0], [(-1.0, 1.0)]).init()

    def config(self) -> tp.Dict[str, tp.Any]:
        return dict(self._config)

    def __call__(
        self, initial_params: tp.ArrayLike, param_ranges: tp.Bounds, param_names: tp.Optional[tp.Sequence[str]] = None
    ) -> Annealer:
        """Creates an annealer, ready for init()

        Parameters
        ----------
        initial_params: array-like
            initial parameters (D values)
        param_ranges: sequence of pairs
            the (min, max) range of each of the D parameters
        param_names: sequence of str (optional)
            names of the parameters, saved along with the history
        """
        annealer = Annealer(
            initial_params,
            param_ranges,
            history_size=self._config["history_size"],
            max_resample_trials=self._config["max_resample_trials"],
        )
        for name in _ATTRIBUTES:
            setattr(annealer, name, self._config[name])
        if param_names is not None:
            if len(param_names) != annealer.dimension:
                raise errors.AnnealValueError(f"Got {len(param_names)} names for {annealer.dimension} parameters")
            annealer.param_names = [str(n) for n in param_names]
        return annealer

    def __repr__(self) -> str:
        return self.name

    def set_name(self, name: str, register: bool = False) -> "ParametrizedAnnealer":
        """Set a new representation for the instance"""
        self.name = name
        if register:
            registry.register_name(name, self)
        return self

    def to_json(self, filepath: tp.PathLike) -> None:
        """Writes the configuration into a json file"""
        filepath = Path(filepath)
        filepath.parent.mkdir(exist_ok=True, parents=True)
        filepath.write_text(json.dumps(self._config, indent=2, sort_keys=True))

    @classmethod
    def from_json(cls, filepath: tp.PathLike) -> "ParametrizedAnnealer":
        """Creates a configured annealer from a json file. Missing entries take their
        default value.
        """
        config = json.loads(Path(filepath).read_text())
        if not isinstance(config, dict):
            raise errors.AnnealValueError(f"Expected a json object in {filepath}, got {type(config).__name__}")
        unknown = set(config) - set(astools.signature_defaults(cls))
        if unknown:
            raise errors.AnnealValueError(f"Unknown annealer parameter(s) {sorted(unknown)} in {filepath}")
        return cls(**config)

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            if self._config == other._config:
                return True
        return False


registry: Registry[ParametrizedAnnealer] = Registry()


ASA = ParametrizedAnnealer().set_name("ASA", register=True)
NoReannealASA = ParametrizedAnnealer(enable_reanneal=False).set_name("NoReannealASA", register=True)
GreedyASA = ParametrizedAnnealer(cost_parameter_scale_ratio=0.01).set_name("GreedyASA", register=True)
UphillASA = ParametrizedAnnealer(downhill=False).set_name("UphillASA", register=True)
