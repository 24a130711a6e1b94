#!/usr/bin/env python3

import unittest
import warnings
from intbits import Bitfield, named, make, join, u8
from intbits import InvalidBitIndex, InvalidBitRange, InvalidValue, InvalidWidth

class Status(Bitfield):
    WIDTH = 8
    foo = named[0:4]
    bar = named[4:7]
    baz = named[7]

class TestBitfield(unittest.TestCase):

    def test_get(self):
        bf = make(0x45, 8)
        self.assertIs(bf[2], True)
        self.assertIs(bf[3], False)
        self.assertEqual(bf[0:4], 5)
        self.assertEqual(bf[4:], 4)

    def test_set_item(self):
        bf = make(0xFF, 8)
        bf[3] = False
        self.assertEqual(bf, 0xF7)
        bf = make(0xFF, 8)
        bf[4:8] = 3
        self.assertEqual(bf, 0x3F)

    def test_set_methods(self):
        bf = make(0xFF, 8)
        bf.set_bit(3, False)
        self.assertEqual(bf.all, 0xF7)
        bf.set_bits(slice(4, 8), 3)
        self.assertEqual(bf.all, 0x37)

    def test_with_leaves_original(self):
        bf = make(0xFF, 8)
        new = bf.with_bits(slice(4, 8), 3)
        self.assertEqual(new, 0x3F)
        self.assertEqual(bf, 0xFF)
        self.assertIs(type(new), type(bf))
        self.assertEqual(bf.with_bit(0, False), 0xFE)

    def test_bounds(self):
        bf = make(0, 8)
        with self.assertRaises(InvalidBitIndex):
            bf[8]
        with self.assertRaises(InvalidBitIndex):
            bf[8] = True
        with self.assertRaises(InvalidBitRange):
            bf[7:9]
        with self.assertRaises(InvalidValue):
            bf.all = 0x100
        with self.assertRaises(InvalidValue):
            Bitfield(1 << 32)

    def test_default_width(self):
        bf = Bitfield()
        self.assertEqual(bf.WIDTH, 32)
        self.assertEqual(bf.all, 0)
        bf[31] = True
        self.assertEqual(int(bf), 0x80000000)

    def test_of(self):
        self.assertIs(Bitfield.of(32), Bitfield)
        self.assertEqual(Bitfield.of(8).WIDTH, 8)
        self.assertEqual(Bitfield.of(12)(0xFFF)[8:], 0xF)
        with self.assertRaises(InvalidWidth):
            Bitfield.of(0)

    def test_equality(self):
        self.assertEqual(make(3, 8), make(3, 8))
        self.assertNotEqual(make(3, 8), make(3, 16))
        self.assertEqual(make(3, 8), 3)
        self.assertEqual(make(3, 8), u8(3))
        self.assertNotEqual(make(3, 8), '3')
        self.assertEqual(hash(make(3, 8)), hash(make(3, 8)))

    def test_copy(self):
        bf = make(0x12, 8)
        clone = bf.copy()
        clone[0] = True
        self.assertEqual(bf, 0x12)
        self.assertEqual(clone, 0x13)

    def test_conversions(self):
        bf = make(0xF7, 8)
        self.assertEqual(hex(bf), '0xf7')
        self.assertEqual(repr(bf), 'Bitfield8(0xf7)')
        self.assertEqual(u8(0xFF).with_bits(slice(0, 8), int(bf)), 0xF7)


class TestNamed(unittest.TestCase):

    def test_get(self):
        s = Status(0x9A)
        self.assertEqual(s.foo, 0xA)
        self.assertEqual(s.bar, 0x1)
        self.assertIs(s.baz, True)

    def test_set(self):
        s = Status(0x9A)
        s.bar = 0b101
        self.assertEqual(s, 0xDA)
        s.baz = False
        self.assertEqual(s, 0x5A)
        s.foo = 0x13
        self.assertEqual(s, 0x53)
        with self.assertRaises(InvalidValue):
            s.foo = 0x100

    def test_class_access(self):
        self.assertIsInstance(Status.foo, named)

    def test_out_of_width(self):
        with self.assertRaises(InvalidBitRange):
            class Bad(Bitfield):
                WIDTH = 8
                field = named[4:9]
        with self.assertRaises(InvalidBitIndex):
            class BadBit(Bitfield):
                WIDTH = 8
                flag = named[8]

    def test_narrowed_subclass(self):
        with self.assertRaises(InvalidBitRange):
            class Narrow(Status):
                WIDTH = 4

    def test_widened_subclass(self):
        class Wide(Status):
            WIDTH = 16
            extra = named[8:16]
        w = Wide(0xAB9A)
        self.assertEqual(w.foo, 0xA)
        self.assertEqual(w.extra, 0xAB)


class TestJoin(unittest.TestCase):

    def test_join(self):
        bf = join(0x34, 0x12)
        self.assertEqual(bf, 0x1234)
        self.assertEqual(bf.WIDTH, 16)
        bf = join(0x01, 0x02, 0x03)
        self.assertEqual(bf, 0x030201)
        self.assertEqual(bf.WIDTH, 32)

    def test_join_width(self):
        bf = join(0x12, width=32)
        self.assertEqual(bf.WIDTH, 32)
        self.assertEqual(bf, 0x12)
        with self.assertRaises(InvalidValue):
            join(0x12, 0x34, width=8)

    def test_join_empty(self):
        bf = join()
        self.assertEqual(bf.WIDTH, 8)
        self.assertEqual(bf, 0)

    def test_join_too_wide(self):
        with self.assertRaises(InvalidWidth):
            join(*range(17))

    def test_join_truncates(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            bf = join(0x1FF)
        self.assertEqual(bf, 0xFF)
        self.assertEqual(len(caught), 1)
        self.assertIn('truncated', str(caught[0].message))

if __name__ == '__main__':
    unittest.main()
