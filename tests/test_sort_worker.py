import unittest
import sys
import os
import threading

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bitonic_sorter.ordering import SortOrder
from bitonic_sorter.sort_errors import InvalidLengthError
from bitonic_sorter.sort_worker import SortWorker
from bitonic_sorter.sorters import generic_sorter


class TestSortWorker(unittest.TestCase):

    def test_success(self):
        values = [10, 30, 11, 20, 4, 330, 21, 110]
        worker = SortWorker(lambda: generic_sorter.sort(values, SortOrder.DESCENDING), label="generic")
        self.assertIsNone(worker.get_result())
        worker.start()
        self.assertTrue(worker.wait(timeout=5.0))

        result = worker.get_result()
        self.assertTrue(result["success"])
        self.assertEqual(result["status"], "Success")
        self.assertEqual(result["worker_label"], "generic")
        self.assertGreaterEqual(result["time_taken"], 0.0)
        self.assertIsNone(worker.get_error())
        self.assertEqual(values, [330, 110, 30, 21, 20, 11, 10, 4])

    def test_error_is_captured(self):
        worker = SortWorker(lambda: generic_sorter.sort([10, 30, 11]), label="bad")
        worker.start()
        self.assertTrue(worker.wait(timeout=5.0))

        result = worker.get_result()
        self.assertFalse(result["success"])
        self.assertEqual(result["status"], "Error")
        self.assertEqual(result["error_type"], "InvalidLengthError")
        self.assertIn("3", result["error"])
        self.assertIsInstance(worker.get_error(), InvalidLengthError)

    def test_returned_dict_is_merged(self):
        worker = SortWorker(lambda: {"comparators": 24})
        worker.start()
        worker.wait(timeout=5.0)
        self.assertEqual(worker.get_result()["comparators"], 24)

    def test_wait_times_out(self):
        gate = threading.Event()
        worker = SortWorker(lambda: gate.wait(5.0))
        worker.start()
        self.assertFalse(worker.wait(timeout=0.05))
        self.assertFalse(worker.is_done())
        self.assertIsNone(worker.get_result())
        gate.set()
        self.assertTrue(worker.wait(timeout=5.0))
        self.assertTrue(worker.is_done())


if __name__ == '__main__':
    unittest.main()
