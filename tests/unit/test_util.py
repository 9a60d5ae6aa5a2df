from plugger import memmap
from plugger import util
from tests.unit import base


class TestUtils(base.BaseTest):
    def test_hexprint(self):
        out = util.hexprint(b'ABCDEFGHIJ')
        lines = out.splitlines()
        self.assertEqual(2, len(lines))
        self.assertEqual('00000: 41 42 43 44 45 46 47 48   ABCDEFGH',
                         lines[0])
        self.assertTrue(lines[1].startswith('00008: 49 4a '))
        self.assertTrue(lines[1].endswith('IJ'))

    def test_hexprint_unprintable(self):
        out = util.hexprint(b'\x00\xff')
        self.assertTrue(out.rstrip().endswith('..'))

    def test_hexprint_addrfmt(self):
        out = util.hexprint(b'A', addrfmt='%(addr)04x')
        self.assertTrue(out.startswith('0000: 41 '))


class TestMemoryMap(base.BaseTest):
    def test_get_set(self):
        mmap = memmap.MemoryMapBytes(b'\x00\x01\x02\x03')
        self.assertEqual(b'\x01\x02', mmap.get(1, 2))
        self.assertEqual(2, mmap[2])
        self.assertEqual(b'\x02\x03', mmap[2:4])
        mmap[1] = 0x1FF
        mmap[2] = b'\xAA\xBB'
        self.assertEqual(b'\x00\xFF\xAA\xBB', mmap.get_packed())
        self.assertEqual(4, len(mmap))

    def test_set_past_end(self):
        mmap = memmap.MemoryMapBytes(b'\x00\x01')
        self.assertRaises(IndexError, mmap.set, 1, b'\x00\x00')
        self.assertEqual(b'\x00\x01', mmap.get_packed())

    def test_set_bad_type(self):
        mmap = memmap.MemoryMapBytes(b'\x00')
        self.assertRaises(ValueError, mmap.set, 0, 'x')

    def test_source_not_modified(self):
        data = bytearray(b'\x00')
        mmap = memmap.MemoryMapBytes(data)
        mmap[0] = 1
        self.assertEqual(b'\x00', data)

    def test_truncate(self):
        mmap = memmap.MemoryMapBytes(b'\x00\x01\x02\x03')
        mmap.truncate(2)
        self.assertEqual(b'\x00\x01', mmap.get_packed())

    def test_printable(self):
        mmap = memmap.MemoryMapBytes(b'ABCD')
        self.assertIn('41 42 43 44', mmap.printable())
        self.assertIn('43 44', mmap.printable(2))
        self.assertNotIn('41', mmap.printable(2))
