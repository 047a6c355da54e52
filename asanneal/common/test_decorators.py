# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
from unittest import TestCase
from . import decorators


class RegistryTests(TestCase):

    def test_register(self) -> None:
        functions: decorators.Registry[tp.Callable[[], int]] = decorators.Registry()
        other: decorators.Registry[tp.Callable[[], int]] = decorators.Registry()

        @functions.register
        def twelve() -> int:
            return 12

        self.assertEqual(twelve(), 12)
        self.assertEqual(list(functions), ["twelve"])
        self.assertEqual(functions["twelve"](), 12)
        self.assertFalse(other)
        with self.assertRaises(RuntimeError):
            functions.register_name("twelve", lambda: 3)
        functions.unregister("twelve")
        functions.unregister("not_registered")
        self.assertFalse(functions)

    def test_missing_name(self) -> None:
        objects: decorators.Registry[int] = decorators.Registry()
        objects.register_name("one", 1)
        with self.assertRaisesRegex(KeyError, "available names are") as context:
            objects["two"]  # pylint: disable=pointless-statement
        # str(KeyError) is the repr of the message, which escapes the quotes
        self.assertIn("['one']", context.exception.args[0])
        self.assertIsNone(objects.get("two"))
