import contextlib
import io
import os
import tempfile
import unittest

from pyCacheSimLib.asm           import assemble
from pyCacheSimLib.sim           import main
from pyCacheSimLib.system.report import memory_dump, valid_ascii


class SimTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name, contents, mode='w'):
        path = os.path.join(self.tmp.name, name)
        with open(path, mode) as f:
            f.write(contents)
        return path

    def run_main(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            rc = main(argv)
        return rc, out.getvalue()

    def test_report(self):
        obj = self.write('p.o', assemble("""
            ADD  R1, 3
            ADD  R2, 9
            MOVE [R1], R2
            MOVE R3, [R1]
        """), 'wb')
        data = self.write('d.hex', "41424344\n")

        rc, out = self.run_main([obj, data])
        self.assertEqual(rc, 0)
        self.assertIn("Illegal instruction ffff detected at address 0004\n", out)
        self.assertIn("There were a total of 1 cache hits and 1 cache misses, "
                      "for a hit rate of 0.500.", out)
        self.assertIn("4142 4344 ffff 0009 ffff", out)

    def test_infinite_loop_report(self):
        obj  = self.write('p.o', assemble("BEQ R0, 0"), 'wb')
        data = self.write('d.hex', "")
        rc, out = self.run_main([obj, data, '--branch-limit', '10'])
        self.assertEqual(rc, 0)
        self.assertIn("Possible infinite loop detected with instruction e400 "
                      "at address 0000", out)
        self.assertIn("hit rate of 0.000.", out)

    def test_trace(self):
        obj  = self.write('p.o', assemble("ADD R1, 1"), 'wb')
        data = self.write('d.hex', "")
        rc, out = self.run_main([obj, data, '--trace'])
        self.assertEqual(rc, 0)
        self.assertTrue(out.startswith("0000 0041 | ADD"))

    def test_missing_file(self):
        data = self.write('d.hex', "")
        with self.assertLogs('pyCacheSimLib', level='ERROR'):
            rc, out = self.run_main([os.path.join(self.tmp.name, 'nope.o'), data])
        self.assertEqual(rc, 1)
        self.assertEqual(out, '')

    def test_bad_geometry(self):
        obj  = self.write('p.o', b'', 'wb')
        data = self.write('d.hex', "")
        with self.assertLogs('pyCacheSimLib', level='ERROR'):
            rc, _ = self.run_main([obj, data, '--block-size', '3'])
        self.assertEqual(rc, 2)


class ReportTestCase(unittest.TestCase):
    def test_valid_ascii(self):
        self.assertEqual(valid_ascii(0x41), 'A')
        self.assertEqual(valid_ascii(0x20), '.')
        self.assertEqual(valid_ascii(0x7f), '.')

    def test_memory_dump(self):
        data = b'AB' + b'\xff' * 62
        lines = memory_dump(data).split('\n')
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[0], "4142 " + "ffff " * 15 + "\t'AB" + "." * 30 + "'")
        self.assertEqual(lines[1], "ffff " * 16 + "\t'" + "." * 32 + "'")
