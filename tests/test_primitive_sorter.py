import unittest
import random
import sys
import os
from array import array

import numpy as np

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bitonic_sorter.sort_errors import InvalidLengthError
from bitonic_sorter.sorters.primitive_sorter import ASCENDING, DESCENDING, sort, sort_array


class TestPrimitiveSort(unittest.TestCase):
    """Direction-flag sort over mutable sequences."""

    def test_u32_ascending(self):
        x = [10, 30, 11, 20, 4, 330, 21, 110]
        sort(x, ASCENDING)
        self.assertEqual(x, [4, 10, 11, 20, 21, 30, 110, 330])

    def test_u32_descending(self):
        x = [10, 30, 11, 20, 4, 330, 21, 110]
        sort(x, DESCENDING)
        self.assertEqual(x, [330, 110, 30, 21, 20, 11, 10, 4])

    def test_array_module_buffer(self):
        x = array("I", [10, 30, 11, 20, 4, 330, 21, 110])
        sort(x, True)
        self.assertEqual(list(x), [4, 10, 11, 20, 21, 30, 110, 330])

    def test_trivial_lengths(self):
        for x in ([], [7]):
            expected = list(x)
            sort(x, DESCENDING)
            self.assertEqual(x, expected)

    def test_randomized_matches_sorted(self):
        rng = random.Random(99)
        for exponent in range(1, 10):
            x = [rng.randint(0, 1000) for _ in range(2 ** exponent)]
            for up in (ASCENDING, DESCENDING):
                with self.subTest(n=len(x), up=up):
                    y = list(x)
                    sort(y, up)
                    self.assertEqual(y, sorted(x, reverse=not up))

    def test_non_power_of_two_is_not_validated(self):
        """Permissive form: terminates, keeps the elements, order unspecified."""
        x = [5, 3, 9, 1, 7, 2]
        sort(x, ASCENDING)
        self.assertEqual(sorted(x), [1, 2, 3, 5, 7, 9])


class TestSortArray(unittest.TestCase):
    """Vectorized compare-and-swap over numpy arrays."""

    def test_scenario(self):
        arr = np.array([10, 30, 11, 20, 4, 330, 21, 110], dtype=np.uint32)
        sort_array(arr)
        np.testing.assert_array_equal(arr, [4, 10, 11, 20, 21, 30, 110, 330])

        sort_array(arr, DESCENDING)
        np.testing.assert_array_equal(arr, [330, 110, 30, 21, 20, 11, 10, 4])

    def test_randomized(self):
        rng = np.random.default_rng(5)
        for exponent in range(0, 12):
            arr = rng.integers(-1000, 1000, size=2 ** exponent)
            for up in (ASCENDING, DESCENDING):
                with self.subTest(n=arr.size, up=up):
                    work = arr.copy()
                    sort_array(work, up)
                    expected = np.sort(arr)
                    np.testing.assert_array_equal(work, expected if up else expected[::-1])

    def test_floats(self):
        arr = np.array([0.5, -1.25, 3.0, 2.0])
        sort_array(arr)
        np.testing.assert_array_equal(arr, [-1.25, 0.5, 2.0, 3.0])

    def test_non_contiguous_view(self):
        base = np.array([8, 0, 3, 0, 5, 0, 1, 0, 7, 0, 2, 0, 6, 0, 4, 0])
        view = base[::2]
        sort_array(view)
        np.testing.assert_array_equal(base[::2], [1, 2, 3, 4, 5, 6, 7, 8])
        np.testing.assert_array_equal(base[1::2], np.zeros(8))

    def test_invalid_length(self):
        arr = np.array([10, 30, 11])
        with self.assertRaises(InvalidLengthError) as ctx:
            sort_array(arr)
        self.assertEqual(ctx.exception.length, 3)
        np.testing.assert_array_equal(arr, [10, 30, 11])

    def test_rejects_2d(self):
        with self.assertRaises(ValueError):
            sort_array(np.zeros((2, 2)))


if __name__ == '__main__':
    unittest.main()
