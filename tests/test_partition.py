import unittest

from pyrollstat.core.domain.errors import ConfigurationError
from pyrollstat.core.domain.sample import Sample
from pyrollstat.core.domain.window import EvictionWindow
from pyrollstat.core.services.partition import SortedPartition


class TestSample(unittest.TestCase):
    def test_orders_by_value_then_id(self):
        samples = [Sample(2.0, 0), Sample(1.0, 3), Sample(2.0, 1), Sample(1.0, 2)]
        self.assertEqual(
            sorted(samples),
            [Sample(1.0, 2), Sample(1.0, 3), Sample(2.0, 0), Sample(2.0, 1)],
        )

    def test_equal_values_are_distinct_samples(self):
        self.assertNotEqual(Sample(5, 0), Sample(5, 1))
        self.assertEqual(Sample(5, 0), Sample(5, 0))

    def test_immutable(self):
        sample = Sample(1.0, 0)
        with self.assertRaises(AttributeError):
            sample.value = 2.0


class TestSortedPartition(unittest.TestCase):
    def setUp(self):
        self.partition = SortedPartition()
        for i, value in enumerate([5, 1, 5, 3, 9]):
            self.partition.add(Sample(value, i))

    def test_min_max(self):
        self.assertEqual(self.partition.min(), Sample(1, 1))
        self.assertEqual(self.partition.max(), Sample(9, 4))
        self.assertEqual(len(self.partition), 5)

    def test_iteration_ascending(self):
        self.assertEqual([s.value for s in self.partition], [1, 3, 5, 5, 9])

    def test_remove_exact_identity(self):
        self.partition.remove(Sample(5, 2))
        self.assertIn(Sample(5, 0), self.partition)
        self.assertNotIn(Sample(5, 2), self.partition)
        self.assertEqual([s.value for s in self.partition], [1, 3, 5, 9])

    def test_remove_missing_raises_key_error(self):
        with self.assertRaises(KeyError):
            self.partition.remove(Sample(5, 99))

    def test_pop_ends(self):
        self.assertEqual(self.partition.pop_min(), Sample(1, 1))
        self.assertEqual(self.partition.pop_max(), Sample(9, 4))
        self.assertEqual(len(self.partition), 3)

    def test_select(self):
        self.assertEqual(self.partition.select(0).value, 1)
        self.assertEqual(self.partition.select(2), Sample(5, 0))
        self.assertEqual(self.partition.select(3), Sample(5, 2))
        with self.assertRaises(IndexError):
            self.partition.select(5)
        with self.assertRaises(IndexError):
            self.partition.select(-1)

    def test_empty_partition(self):
        self.partition.clear()
        self.assertFalse(self.partition)
        for op in (self.partition.min, self.partition.max, self.partition.pop_min, self.partition.pop_max):
            with self.assertRaises(IndexError):
                op()


class TestEvictionWindow(unittest.TestCase):
    def test_fifo(self):
        window = EvictionWindow(2)
        window.push(Sample(1, 0))
        window.push(Sample(2, 1))
        self.assertTrue(window.is_full())
        self.assertEqual(window.pop_oldest(), Sample(1, 0))
        self.assertEqual(list(window), [Sample(2, 1)])

    def test_push_when_full_raises(self):
        window = EvictionWindow(1)
        window.push(Sample(1, 0))
        with self.assertRaises(OverflowError):
            window.push(Sample(2, 1))
        self.assertEqual(len(window), 1)

    def test_pop_empty_raises(self):
        with self.assertRaises(IndexError):
            EvictionWindow(3).pop_oldest()

    def test_clear(self):
        window = EvictionWindow(3)
        window.push(Sample(1, 0))
        window.clear()
        self.assertEqual(len(window), 0)
        self.assertFalse(window.is_full())

    def test_invalid_capacity(self):
        for capacity in (0, -3, None, 1.5):
            with self.subTest(capacity=capacity):
                with self.assertRaises(ConfigurationError):
                    EvictionWindow(capacity)


if __name__ == "__main__":
    unittest.main()
