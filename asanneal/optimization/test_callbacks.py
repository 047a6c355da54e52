# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import time
import logging
from pathlib import Path
import pytest
import numpy as np
import asanneal as asa
import asanneal.common.typing as tp
from asanneal.common import errors
from asanneal.functions import corefuncs
from . import callbacks


def _annealer(seed: int = 12, **kwargs: tp.Any) -> asa.Annealer:
    annealer = asa.families.ASA([1.0, -2.0], [(-3, 3), (-3, 3)], **kwargs)
    annealer.random_state = np.random.RandomState(seed)
    return annealer


def test_anneal_logger(caplog: tp.Any) -> None:
    annealer = _annealer()
    logger = logging.getLogger("asanneal.test")
    annealer.register_callback("step", callbacks.AnnealLogger(logger=logger, log_interval_steps=5))
    with caplog.at_level(logging.INFO, logger="asanneal.test"):
        annealer.minimize(corefuncs.sphere, max_steps=20)
    records = [r for r in caplog.records if r.name == "asanneal.test"]
    assert len(records) == 4
    assert "After 5 steps" in records[0].getMessage()


def test_parameters_logger(tmp_path: Path) -> None:
    filepath = tmp_path / "logs.txt"
    annealer = _annealer(param_names=["alpha", "beta"])
    logger = callbacks.ParametersLogger(filepath)
    annealer.register_callback("step", logger)
    annealer.minimize(corefuncs.ellipsoid, max_steps=30)
    data = logger.load()
    assert len(data) == 30
    assert data[-1]["#step"] == 30
    assert {"alpha", "beta", "#T_k", "#f_x_best", "#x_best"} <= set(data[0])
    assert data[-1]["#f_x_best"] == annealer.f_x_best
    # starting a new logger without appending clears the file
    logger = callbacks.ParametersLogger(filepath, append=False)
    assert not logger.load()


def test_parameters_logger_default_names(tmp_path: Path) -> None:
    annealer = _annealer()
    logger = callbacks.ParametersLogger(tmp_path / "logs.txt")
    annealer.register_callback("step", logger)
    annealer.minimize(corefuncs.sphere, max_steps=2)
    assert {"0", "1"} <= set(logger.load()[0])


def test_annealer_dump(tmp_path: Path) -> None:
    filepath = tmp_path / "dump.pkl"
    annealer = _annealer()
    annealer.register_callback("reanneal", callbacks.AnnealerDump(filepath))
    annealer.reanneal_after_steps = 10
    annealer.minimize(corefuncs.sphere, max_steps=40)
    loaded = asa.Annealer.load(filepath)
    assert loaded.last_reanneal_steps > 0
    assert loaded.k_r == 0


def test_early_stopping() -> None:
    annealer = _annealer()
    annealer.register_callback("step", callbacks.EarlyStopping(lambda ann: ann.steps > 3))
    annealer.minimize(corefuncs.sphere)
    assert annealer.steps == 4


def test_early_stopping_on_reanneal_fails() -> None:
    annealer = _annealer()
    annealer.reanneal_after_steps = 10
    annealer.register_callback("reanneal", callbacks.EarlyStopping(lambda ann: False))
    with pytest.raises(errors.AnnealRuntimeError, match="step event"):
        annealer.minimize(corefuncs.sphere, max_steps=40)


def test_timer_stopping() -> None:
    annealer = _annealer()

    def slow_sphere(x: np.ndarray) -> float:
        time.sleep(0.01)
        return corefuncs.sphere(x)

    annealer.f_x_best_repeat_max = 100000
    annealer.register_callback("step", callbacks.EarlyStopping.timer(0.1))
    annealer.minimize(slow_sphere)
    assert annealer.state != asa.AnnealState.READY_TO_STOP
    assert 1 < annealer.steps < 20


def test_no_improvement_stopper() -> None:
    annealer = _annealer()

    def constant(x: np.ndarray) -> float:  # pylint: disable=unused-argument
        return 12.0

    annealer.f_x_best_repeat_max = 100000
    annealer.enable_reanneal = False
    annealer.register_callback("step", callbacks.EarlyStopping.no_improvement_stopper(5))
    annealer.minimize(constant)
    # the first step improves from inf, then 6 steps without improvement
    assert annealer.steps == 7


def test_no_improvement_stopper_uphill() -> None:
    criterion = callbacks._ImprovementToleranceCriterion(2)
    annealer = _annealer()
    annealer.downhill = False
    for value, expected in [(1.0, False), (2.0, False), (0.0, False), (1.0, False), (-1.0, True)]:
        annealer.f_x_best = value
        assert criterion(annealer) == expected


def test_reanneal_logger(caplog: tp.Any) -> None:
    annealer = _annealer()
    annealer.reanneal_after_steps = 10
    annealer.register_callback("reanneal", callbacks.ReannealLogger(logger=logging.getLogger("asanneal.test")))
    with caplog.at_level(logging.INFO, logger="asanneal.test"):
        annealer.minimize(corefuncs.sphere, max_steps=40)
    messages = [r.getMessage() for r in caplog.records if r.name == "asanneal.test"]
    assert messages
    assert all(m.startswith("Reannealed at step") for m in messages)


def test_anneal_logger_intervals() -> None:
    with pytest.raises(errors.AnnealValueError):
        callbacks.AnnealLogger(log_interval_steps=0)
