# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
from . import tools


class _Configured:
    def __init__(self, a: int, b: str = "blublu", *, c: float = 0.5) -> None:
        self.a = a
        self.b = b
        self.c = c


def test_signature_defaults() -> None:
    assert tools.signature_defaults(_Configured) == {"b": "blublu", "c": 0.5}


def test_different_from_defaults() -> None:
    assert tools.different_from_defaults(_Configured, {"a": 3, "b": "other", "c": 0.5}) == {"b": "other"}
    assert not tools.different_from_defaults(_Configured, {"b": "blublu", "c": 0.5}, check_mismatches=True)


def test_different_from_defaults_mismatch() -> None:
    with pytest.raises(RuntimeError, match="Mismatch"):
        tools.different_from_defaults(_Configured, {"b": "blublu"}, check_mismatches=True)
