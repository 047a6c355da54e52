# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp


X = tp.TypeVar("X")


class Registry(tp.MutableMapping[str, X]):
    """Dict of named objects (test functions, configured annealers...),
    filled through the :code:`register` decorator or :code:`register_name`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.data: tp.Dict[str, X] = {}

    def register(self, obj: X) -> X:
        """Decorator registering a function or class under its own name"""
        self.register_name(getattr(obj, "__name__", obj.__class__.__name__), obj)
        return obj

    def register_name(self, name: str, obj: X) -> None:
        """Registers an object under the given name, which must not be taken yet"""
        if name in self.data:
            raise RuntimeError(f'Encountered a name collision "{name}"')
        self.data[name] = obj

    def unregister(self, name: str) -> None:
        """Removes an object if it is registered (useful when re-running a notebook)"""
        self.data.pop(name, None)

    def __getitem__(self, key: str) -> X:
        if key not in self.data:
            raise KeyError(f'"{key}" is not registered, available names are: {sorted(self.data)}')
        return self.data[key]

    def __setitem__(self, key: str, value: X) -> None:
        self.data[key] = value

    def __delitem__(self, key: str) -> None:
        del self.data[key]

    def __iter__(self) -> tp.Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)
