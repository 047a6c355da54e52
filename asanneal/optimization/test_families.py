# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import json
import tempfile
from pathlib import Path
import pytest
import numpy as np
import asanneal.common.typing as tp
from asanneal.common import errors
from asanneal.common import testing
from asanneal.functions import corefuncs
from . import families
from .annealer import AnnealState


@testing.parametrized(**{name: (name,) for name in families.registry})
def test_registered_annealers(name: str) -> None:
    family = families.registry[name]
    annealer = family([1.0, 2.0], [(-3, 3), (-3, 3)])
    annealer.random_state = np.random.RandomState(12)
    func = corefuncs.negsphere if not annealer.downhill else corefuncs.sphere
    recom = annealer.minimize(func, max_steps=200)
    testing.assert_within_bounds([recom], [-3, -3], [3, 3])
    assert abs(func(recom)) < 5.0  # started at 5


def test_family_configuration() -> None:
    family = families.ParametrizedAnnealer(delta_param=0.1, exit_at_T_f=True, history_size=12)
    annealer = family([1.0], [(0, 2)], param_names=["position"])
    assert annealer.delta_param == 0.1
    assert annealer.exit_at_T_f
    assert annealer.history.max_size == 12
    assert annealer.param_names == ["position"]
    assert annealer.state == AnnealState.NEED_TO_INIT
    assert family.config()["delta_param"] == 0.1


def test_param_names_mismatch() -> None:
    with pytest.raises(errors.AnnealValueError, match="names"):
        families.ASA([1.0, 1.0], [(0, 2), (0, 2)], param_names=["position"])


def test_repr() -> None:
    family = families.ParametrizedAnnealer(reanneal_after_steps=12, downhill=False)
    testing.printed_assert_equal(repr(family), "ParametrizedAnnealer(downhill=False, reanneal_after_steps=12)")
    assert repr(families.GreedyASA) == "GreedyASA"


def test_invalid_configuration() -> None:
    with pytest.raises(errors.AnnealValueError):
        families.ParametrizedAnnealer(temperature_ratio_scale=1.5)


def test_registry_collision() -> None:
    family = families.ParametrizedAnnealer(delta_param=0.02)
    with pytest.raises(RuntimeError, match="collision"):
        family.set_name("ASA", register=True)


def test_json(tmp_path: Path) -> None:
    filepath = tmp_path / "config.json"
    family = families.ParametrizedAnnealer(delta_param=0.02, history_size=None, f_x_best_repeat_max=3)
    family.to_json(filepath)
    loaded = families.ParametrizedAnnealer.from_json(filepath)
    assert loaded == family
    assert loaded != families.ASA
    assert repr(loaded) == repr(family)


@testing.parametrized(
    unknown_key=({"delta_param": 0.1, "blublu": 12}, "blublu"),
    not_an_object=([0.1], "json object"),
)
def test_json_errors(content: tp.Any, message: str) -> None:
    with tempfile.TemporaryDirectory() as folder:
        filepath = Path(folder) / "config.json"
        filepath.write_text(json.dumps(content))
        with pytest.raises(errors.AnnealValueError, match=message):
            families.ParametrizedAnnealer.from_json(filepath)
