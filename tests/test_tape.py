#!/usr/bin/env python3
"""Tape tests: wraparound arithmetic, growth, ceiling and underflow."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bfengine import PointerUnderflow, Tape, TapeOverflow
from bfengine.tape import DEFAULT_CAPACITY


class TestTapeArithmetic(unittest.TestCase):

    def test_fresh_tape(self):
        tape = Tape()
        self.assertEqual(len(tape), DEFAULT_CAPACITY)
        self.assertEqual(tape.pointer, 0)
        self.assertEqual(tape.read(), 0)
        self.assertEqual(int(tape.view().sum()), 0)

    def test_increments_wrap(self):
        for n in (1, 255, 256, 257, 1000):
            tape = Tape(capacity=8)
            for _ in range(n):
                tape.increment()
            self.assertEqual(tape.read(), n % 256, f"{n} increments")

    def test_decrements_wrap(self):
        tape = Tape(capacity=8)
        tape.decrement()
        self.assertEqual(tape.read(), 255)
        for _ in range(255):
            tape.decrement()
        self.assertEqual(tape.read(), 0)

    def test_write_and_read(self):
        tape = Tape(capacity=8)
        tape.write(200)
        self.assertEqual(tape.read(), 200)
        tape.increment()
        self.assertEqual(tape.read(), 201)

    def test_write_rejects_out_of_range(self):
        tape = Tape(capacity=8)
        with self.assertRaises(ValueError):
            tape.write(256)
        with self.assertRaises(ValueError):
            tape.write(-1)


class TestTapeMovement(unittest.TestCase):

    def test_move_left_at_zero_underflows(self):
        tape = Tape(capacity=8)
        with self.assertRaises(PointerUnderflow):
            tape.move_left()
        self.assertEqual(tape.pointer, 0)

    def test_move_left_after_right(self):
        tape = Tape(capacity=8)
        tape.move_right()
        tape.move_left()
        self.assertEqual(tape.pointer, 0)

    def test_growth_by_one_block(self):
        tape = Tape(capacity=4)
        for _ in range(3):
            tape.move_right()
        self.assertEqual(tape.pointer, 3)
        self.assertEqual(len(tape), 4)

        tape.increment()
        tape.move_right()
        self.assertEqual(tape.pointer, 4)
        self.assertEqual(len(tape), 8)
        self.assertEqual(tape.read(), 0)
        # cells before the growth point keep their values
        self.assertEqual(int(tape.view()[3]), 1)

    def test_growth_is_repeated(self):
        tape = Tape(capacity=4)
        for _ in range(20):
            tape.move_right()
        self.assertEqual(tape.pointer, 20)
        self.assertEqual(len(tape), 24)

    def test_ceiling(self):
        tape = Tape(capacity=4, max_length=6)
        for _ in range(5):
            tape.move_right()
        self.assertEqual(len(tape), 6)
        self.assertEqual(tape.pointer, 5)
        with self.assertRaises(TapeOverflow) as ctx:
            tape.move_right()
        self.assertEqual(ctx.exception.limit, 6)
        self.assertEqual(tape.pointer, 5)

    def test_ceiling_smaller_than_capacity(self):
        tape = Tape(capacity=16, max_length=2)
        self.assertEqual(len(tape), 2)
        tape.move_right()
        with self.assertRaises(TapeOverflow):
            tape.move_right()

    def test_invalid_sizes(self):
        with self.assertRaises(ValueError):
            Tape(capacity=0)
        with self.assertRaises(ValueError):
            Tape(capacity=4, max_length=0)


class TestTapeViews(unittest.TestCase):

    def test_view_is_read_only(self):
        tape = Tape(capacity=8)
        view = tape.view()
        with self.assertRaises(ValueError):
            view[0] = 1
        tape.increment()
        self.assertEqual(int(view[0]), 1)

    def test_window_is_clamped(self):
        tape = Tape(capacity=8)
        tape.write(7)
        self.assertEqual(tape.window(-5, 3).tolist(), [7, 0, 0])
        self.assertEqual(len(tape.window(6, 100)), 2)
        self.assertEqual(len(tape.window(10, 20)), 0)


if __name__ == '__main__':
    unittest.main()
