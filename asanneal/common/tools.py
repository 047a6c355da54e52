# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp


def signature_defaults(cls: tp.Type[tp.Any]) -> tp.Dict[str, tp.Any]:
    """Keyword arguments of the constructor of a class which have a default value"""
    parameters = inspect.signature(cls.__init__).parameters
    return {name: p.default for name, p in parameters.items() if p.default is not inspect.Parameter.empty}


def different_from_defaults(
    cls: tp.Type[tp.Any], config: tp.Mapping[str, tp.Any], check_mismatches: bool = False
) -> tp.Dict[str, tp.Any]:
    """Entries of a configuration of cls which differ from the default arguments
    of its constructor (convenient for short reprs)

    Parameters
    ----------
    cls: type
        the configured class
    config: dict
        the constructor arguments
    check_mismatches: bool
        raises if the config keys do not exactly match the arguments with defaults
    """
    defaults = signature_defaults(cls)
    if check_mismatches:
        mismatches = set(defaults).symmetric_difference(config)
        if mismatches:
            raise RuntimeError(f"Mismatch between the configuration and the arguments of {cls.__name__}: {mismatches}")
    return {name: value for name, value in config.items() if name in defaults and defaults[name] != value}
