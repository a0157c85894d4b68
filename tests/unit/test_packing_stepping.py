# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import unittest

from offsite.packing.stepping import carve, needs_rollover, step_once


class TestNeedsRollover(unittest.TestCase):
    def test_rollover_below_one_block(self) -> None:
        self.assertTrue(needs_rollover(0, 100))
        self.assertTrue(needs_rollover(99, 100))
        self.assertFalse(needs_rollover(100, 100))
        self.assertFalse(needs_rollover(10_000, 100))


class TestCarve(unittest.TestCase):
    def test_file_that_fits_runs_to_eof(self) -> None:
        cut = carve(10_000, 6_000, 10_000, 100)
        self.assertEqual(cut.copy_bytes, 6_000)
        self.assertEqual(cut.remaining, 4_000)
        self.assertTrue(cut.to_eof)

    def test_unaligned_tail_fits_without_rounding(self) -> None:
        cut = carve(10_000, 1_234, 10_000, 100)
        self.assertEqual(cut.copy_bytes, 1_234)
        self.assertTrue(cut.to_eof)

    def test_volume_limited_part_rounds_down_to_blocks(self) -> None:
        cut = carve(4_050, 6_000, 10_000, 100)
        self.assertEqual(cut.copy_bytes, 4_000)
        self.assertEqual(cut.remaining, 50)
        self.assertFalse(cut.to_eof)

    def test_max_file_size_caps_part(self) -> None:
        cut = carve(10_000, 7_000, 3_000, 100)
        self.assertEqual(cut.copy_bytes, 3_000)
        self.assertEqual(cut.remaining, 7_000)
        self.assertFalse(cut.to_eof)

    def test_exact_fill_is_not_marked_eof(self) -> None:
        cut = carve(4_000, 4_000, 10_000, 100)
        self.assertEqual(cut.copy_bytes, 4_000)
        self.assertEqual(cut.remaining, 0)
        self.assertFalse(cut.to_eof)


class TestStepOnce(unittest.TestCase):
    def test_rolls_over_when_volume_is_exhausted(self) -> None:
        step = step_once(50, 2_000, volume_capacity=10_000, max_file_size=10_000, block_size=100)
        self.assertTrue(step.rolled_over)
        self.assertEqual(step.consumed, 2_000)
        self.assertEqual(step.remaining, 8_000)

    def test_keeps_current_volume_with_a_block_left(self) -> None:
        step = step_once(100, 2_000, volume_capacity=10_000, max_file_size=10_000, block_size=100)
        self.assertFalse(step.rolled_over)
        self.assertEqual(step.consumed, 100)
        self.assertEqual(step.remaining, 0)

    def test_is_pure(self) -> None:
        args = (4_000, 6_000)
        kwargs = {"volume_capacity": 10_000, "max_file_size": 10_000, "block_size": 100}
        self.assertEqual(step_once(*args, **kwargs), step_once(*args, **kwargs))


if __name__ == "__main__":
    unittest.main()
