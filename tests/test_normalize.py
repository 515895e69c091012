from __future__ import annotations

from decimal import Decimal
import importlib.util
import unittest

import numpy as np

from chartaxis.adapters.normalize import coerce_entries
from chartaxis.errors import AxisConfigError


class CoerceEntriesTests(unittest.TestCase):
    def test_sequence_becomes_float64_array(self) -> None:
        out = coerce_entries([1, 2, 3])
        self.assertEqual(out.dtype, np.float64)
        self.assertEqual(out.tolist(), [1.0, 2.0, 3.0])

    def test_none_is_empty(self) -> None:
        self.assertEqual(coerce_entries(None).size, 0)

    def test_decimal_and_none_values(self) -> None:
        out = coerce_entries([Decimal("1.5"), None, 2])
        self.assertEqual(out[0], 1.5)
        self.assertTrue(np.isnan(out[1]))
        self.assertEqual(out[2], 2.0)

    def test_integer_array_keeps_order(self) -> None:
        out = coerce_entries(np.asarray([3, 1, 2], dtype=np.int32))
        self.assertEqual(out.tolist(), [3.0, 1.0, 2.0])

    def test_rejects_bad_input(self) -> None:
        with self.assertRaises(AxisConfigError):
            coerce_entries(np.zeros((2, 2)))
        with self.assertRaises(AxisConfigError):
            coerce_entries(["a", "b"])
        with self.assertRaises(AxisConfigError):
            coerce_entries("123")
        with self.assertRaises(AxisConfigError):
            coerce_entries(5.0)

    @unittest.skipUnless(importlib.util.find_spec("torch") is not None, "torch not installed")
    def test_torch_tensor_entries(self) -> None:
        import torch

        out = coerce_entries(torch.tensor([1.0, 2.5], dtype=torch.float32))
        self.assertEqual(out.dtype, np.float64)
        self.assertEqual(out.tolist(), [1.0, 2.5])
        with self.assertRaises(AxisConfigError):
            coerce_entries(torch.zeros((2, 2)))


if __name__ == "__main__":
    unittest.main()
