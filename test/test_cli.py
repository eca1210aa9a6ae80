import io
import os
import tempfile

from gash import cli

from . import TestBase


class TestCommandLine(TestBase):

    def setUp(self):
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()
        super().tearDown()

    def sample(self, name: str, data: bytes) -> str:
        path = os.path.join(self.root, name)
        with open(path, 'wb') as fd:
            fd.write(data)
        return path

    def run_cli(self, *argv: str):
        out = io.StringIO()
        code = cli.main(list(argv), out)
        return code, out.getvalue().splitlines()

    def test_default_is_md5(self):
        path = self.sample('abc.txt', B'abc')
        code, lines = self.run_cli(path)
        self.assertEqual(code, 0)
        self.assertEqual(lines[0], F'Gash version: {cli.gash.__version__}')
        self.assertEqual(lines[1], F'File: {path}')
        self.assertEqual(lines[2], 'MD5: 900150983cd24fb0d6963f7d28e17f72')

    def test_algorithm_switches(self):
        path = self.sample('check.txt', B'123456789')
        for switch, line in [
            ('-sha256', 'SHA-256: 15e2b0d3c33891ebb0f1ef609ec419420c20e320ce94c65fbc8c3312448eb225'),
            ('--crc32', 'CRC-32: cbf43926'),
            ('-adler32', 'Adler-32: 091e01de'),
            ('-elf', 'ELF: 0678aee9'),
            ('-md5', 'MD5: 25f9e794323b453885f5181f1b624d0b'),
        ]:
            code, lines = self.run_cli(switch, path)
            self.assertEqual(code, 0)
            self.assertEqual(lines[-1], line)

    def test_multiple_files(self):
        a = self.sample('a.bin', B'')
        b = self.sample('b.bin', B'abc')
        code, lines = self.run_cli('-crc32', a, b)
        self.assertEqual(code, 0)
        self.assertEqual(lines[1:], [
            F'File: {a}', 'CRC-32: 00000000',
            F'File: {b}', 'CRC-32: 352441c2',
        ])

    def test_missing_file(self):
        path = self.sample('present.bin', B'abc')
        code, lines = self.run_cli('-adler32', os.path.join(self.root, 'absent.bin'), path)
        self.assertEqual(code, 1)
        self.assertEqual(lines[1:], [F'File: {path}', 'Adler-32: 024d0127'])

    def test_credits(self):
        code, lines = self.run_cli('-c')
        self.assertEqual(code, 0)
        self.assertContains('\n'.join(lines), 'Gary Hammock')

    def test_no_files_prints_help(self):
        code, lines = self.run_cli()
        self.assertEqual(code, 0)
        self.assertTrue(any(line.startswith('usage:') for line in lines))

    def test_conflicting_switches(self):
        path = self.sample('x.bin', B'x')
        code, _ = self.run_cli('-md5', '-sha256', path)
        self.assertEqual(code, 2)
