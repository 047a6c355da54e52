# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Records of the parameters evaluated during an annealing run, and their export
into a numpy ``.npz`` container.

The container holds the following entries:

- ``param_hist_accepted`` / ``f_param_hist_accepted``: accepted parameters (N x D) and their objectives
- ``param_hist_rejected`` / ``f_param_hist_rejected``: parameters kept after a rejection and their objectives
- ``x_best`` / ``f_x_best``: best parameters and objective
- ``param_name_1``, ``param_name_2``...: optional names of the parameters
"""

from pathlib import Path
from collections import deque
import numpy as np
import asanneal.common.typing as tp
from asanneal.common import errors


_NAME_PREFIX = "param_name_"


class History:
    """Accepted and rejected parameters with their objective values.

    Parameters
    ----------
    dimension: int
        number of parameters
    max_size: int or None
        if provided, only the latest max_size accepted entries and the latest
        max_size rejected entries are retained. Everything is kept otherwise.
    """

    def __init__(self, dimension: int, max_size: tp.Optional[int] = None) -> None:
        if max_size is not None and max_size < 1:
            raise errors.AnnealValueError(f"History size must be at least 1 (got {max_size})")
        self.dimension = int(dimension)
        self.max_size = max_size
        self._accepted: tp.Deque[tp.Tuple[np.ndarray, float]] = deque(maxlen=max_size)
        self._rejected: tp.Deque[tp.Tuple[np.ndarray, float]] = deque(maxlen=max_size)
        self.num_accepted = 0  # total counts, not limited by max_size
        self.num_rejected = 0

    def add_accepted(self, x: np.ndarray, f_x: float) -> None:
        self._accepted.append((np.array(x, dtype=float), float(f_x)))
        self.num_accepted += 1

    def add_rejected(self, x: np.ndarray, f_x: float) -> None:
        self._rejected.append((np.array(x, dtype=float), float(f_x)))
        self.num_rejected += 1

    @property
    def accepted_params(self) -> np.ndarray:
        return self._stack(self._accepted)

    @property
    def accepted_objectives(self) -> np.ndarray:
        return np.array([f for _, f in self._accepted], dtype=float)

    @property
    def rejected_params(self) -> np.ndarray:
        return self._stack(self._rejected)

    @property
    def rejected_objectives(self) -> np.ndarray:
        return np.array([f for _, f in self._rejected], dtype=float)

    def _stack(self, records: tp.Iterable[tp.Tuple[np.ndarray, float]]) -> np.ndarray:
        arrays = [x for x, _ in records]
        if not arrays:
            return np.zeros((0, self.dimension))
        return np.stack(arrays)

    def __len__(self) -> int:
        return len(self._accepted) + len(self._rejected)

    def __repr__(self) -> str:
        return (f"History(dimension={self.dimension}, max_size={self.max_size}, "
                f"accepted={len(self._accepted)}, rejected={len(self._rejected)})")

    def save(
        self,
        filepath: tp.PathLike,
        x_best: tp.ArrayLike,
        f_x_best: float,
        param_names: tp.Sequence[str] = (),
    ) -> None:
        """Writes the history, the best point and parameter names to a .npz container
        (the file is replaced if it exists)
        """
        arrays: tp.Dict[str, np.ndarray] = {
            "param_hist_accepted": self.accepted_params,
            "f_param_hist_accepted": self.accepted_objectives,
            "param_hist_rejected": self.rejected_params,
            "f_param_hist_rejected": self.rejected_objectives,
            "x_best": np.array(x_best, dtype=float),
            "f_x_best": np.array(f_x_best, dtype=float),
        }
        for k, name in enumerate(param_names):
            arrays[f"{_NAME_PREFIX}{k + 1}"] = np.array(str(name))
        filepath = Path(filepath)
        filepath.parent.mkdir(exist_ok=True, parents=True)
        with filepath.open("wb") as f:  # file object avoids numpy appending a .npz suffix
            np.savez(f, **arrays)


class SavedRun(tp.NamedTuple):
    """Content of a saved annealing run"""

    accepted_params: np.ndarray
    accepted_objectives: np.ndarray
    rejected_params: np.ndarray
    rejected_objectives: np.ndarray
    x_best: np.ndarray
    f_x_best: float
    param_names: tp.List[str]


def load_history(filepath: tp.PathLike) -> SavedRun:
    """Loads a run saved through :code:`History.save` (or :code:`Annealer.save`)"""
    with np.load(Path(filepath), allow_pickle=False) as data:
        num_names = sum(1 for key in data.files if key.startswith(_NAME_PREFIX))
        return SavedRun(
            accepted_params=data["param_hist_accepted"],
            accepted_objectives=data["f_param_hist_accepted"],
            rejected_params=data["param_hist_rejected"],
            rejected_objectives=data["f_param_hist_rejected"],
            x_best=data["x_best"],
            f_x_best=float(data["f_x_best"]),
            param_names=[str(data[f"{_NAME_PREFIX}{k + 1}"]) for k in range(num_names)],
        )
