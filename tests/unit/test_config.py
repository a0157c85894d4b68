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

from offsite.config import DEFAULT_CONFIG_PATH, load_app_config, parse_app_config
from offsite.core.bounds import DEFAULT_BLOCK_SIZE, DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_VOLUME_SIZE


class TestLoadAppConfig(unittest.TestCase):
    def test_packaged_defaults(self) -> None:
        config = load_app_config(DEFAULT_CONFIG_PATH)
        self.assertEqual(config.source, DEFAULT_CONFIG_PATH)
        self.assertIsNone(config.paths.backup_dir)
        self.assertIsNone(config.paths.work_dir)
        self.assertIsNone(config.paths.password_file)
        self.assertEqual(config.limits.block_size, DEFAULT_BLOCK_SIZE)
        self.assertEqual(config.limits.max_file_size, DEFAULT_MAX_FILE_SIZE)
        self.assertEqual(config.limits.max_volume_size, DEFAULT_MAX_VOLUME_SIZE)
        self.assertEqual(config.cipher.backend, "gpg")
        self.assertEqual(config.cipher.gpg_path, "gpg")
        self.assertFalse(config.logging.syslog)
        self.assertEqual(config.logging.facility, "user")
        self.assertEqual(config.runtime.jobs, 1)

    def test_custom_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "offsite.toml"
            path.write_text(
                "\n".join(
                    [
                        "[paths]",
                        'backup_dir = "/backup"',
                        'work_dir = " /spool "',
                        "[limits]",
                        "block_size = 2048",
                        "max_volume_size = 700000000",
                        "[cipher]",
                        'backend = "AGE"',
                        "[logging]",
                        'syslog = "yes"',
                        'facility = "local3"',
                        'level = "debug"',
                        "[runtime]",
                        'jobs = "auto"',
                    ]
                ),
                encoding="utf-8",
            )
            config = load_app_config(path)
        self.assertEqual(config.paths.backup_dir, "/backup")
        self.assertEqual(config.paths.work_dir, "/spool")
        self.assertEqual(config.limits.block_size, 2048)
        self.assertEqual(config.limits.max_file_size, DEFAULT_MAX_FILE_SIZE)
        self.assertEqual(config.limits.max_volume_size, 700_000_000)
        self.assertEqual(config.cipher.backend, "age")
        self.assertIsNone(config.cipher.gpg_path)
        self.assertTrue(config.logging.syslog)
        self.assertEqual(config.logging.facility, "local3")
        self.assertEqual(config.logging.level, "debug")
        self.assertEqual(config.runtime.jobs, "auto")

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaisesRegex(ValueError, "config file not found"):
                load_app_config(Path(tmpdir) / "nope.toml")

    def test_malformed_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.toml"
            path.write_text("[paths\nwork_dir = ", encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "invalid config file"):
                load_app_config(path)


class TestParseAppConfig(unittest.TestCase):
    def test_empty_document_uses_defaults(self) -> None:
        config = parse_app_config({})
        self.assertIsNone(config.source)
        self.assertEqual(config.limits.block_size, DEFAULT_BLOCK_SIZE)
        self.assertEqual(config.cipher.backend, "gpg")

    def test_invalid_values(self) -> None:
        cases = (
            ({"limits": {"block_size": 0}}, "limits.block_size"),
            ({"limits": {"max_file_size": "big"}}, "limits.max_file_size"),
            ({"limits": {"max_volume_size": True}}, "limits.max_volume_size"),
            ({"limits": {"block_size": 1.5}}, "limits.block_size"),
            ({"cipher": {"backend": "rot13"}}, "cipher.backend"),
            ({"logging": {"facility": "nowhere"}}, "logging.facility"),
            ({"logging": {"syslog": "maybe"}}, "logging.syslog"),
            ({"logging": {"level": "loud"}}, "logging.level"),
            ({"runtime": {"jobs": 0}}, "runtime.jobs"),
            ({"runtime": {"jobs": "lots"}}, "runtime.jobs"),
            ({"paths": {"work_dir": 42}}, "paths.work_dir"),
        )
        for data, field in cases:
            with self.subTest(field=field, data=data):
                with self.assertRaisesRegex(ValueError, field):
                    parse_app_config(data)

    def test_numeric_strings_and_whole_floats(self) -> None:
        config = parse_app_config({"limits": {"block_size": "512", "max_file_size": 4096.0}})
        self.assertEqual(config.limits.block_size, 512)
        self.assertEqual(config.limits.max_file_size, 4096)

    def test_non_table_sections_are_ignored(self) -> None:
        config = parse_app_config({"paths": "oops"})
        self.assertIsNone(config.paths.work_dir)


if __name__ == "__main__":
    unittest.main()
