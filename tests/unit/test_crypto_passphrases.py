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

import tempfile
import unittest
from pathlib import Path

from offsite.core.errors import ExtractionOrEncryptionError, PassphraseError
from offsite.crypto import read_passphrase


class TestReadPassphrase(unittest.TestCase):
    def setUp(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.root = Path(tmpdir.name)

    def test_first_line_only(self) -> None:
        path = self.root / "pw"
        path.write_bytes(b"open sesame\r\nsecond line\n")
        self.assertEqual(read_passphrase(path), "open sesame")

    def test_without_trailing_newline(self) -> None:
        path = self.root / "pw"
        path.write_text("  spaced  ", encoding="utf-8")
        self.assertEqual(read_passphrase(path), "  spaced  ")

    def test_empty_file(self) -> None:
        path = self.root / "pw"
        path.write_text("\nsecret on line two\n", encoding="utf-8")
        with self.assertRaisesRegex(PassphraseError, "empty"):
            read_passphrase(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(ExtractionOrEncryptionError):
            read_passphrase(self.root / "missing")

    def test_undecodable_file(self) -> None:
        path = self.root / "pw"
        path.write_bytes(b"\xff\xfe\xfd\n")
        with self.assertRaises(PassphraseError):
            read_passphrase(path)


if __name__ == "__main__":
    unittest.main()
