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

import dataclasses
import signal
import tempfile
import threading
import unittest
from pathlib import Path
from unittest import mock

from test_support import PlainCopyCipher, write_file, write_passphrase

from offsite.cli.core.types import PackArgs
from offsite.cli.flows import pack as pack_flow
from offsite.config import parse_app_config
from offsite.core.errors import PassphraseError, WorkDirectoryError

CONFIG = parse_app_config(
    {
        "paths": {"backup_dir": "/backup", "work_dir": "/spool", "password_file": "/etc/pw"},
        "limits": {"block_size": 512, "max_file_size": 4096, "max_volume_size": 8192},
        "cipher": {"backend": "age"},
        "runtime": {"jobs": "auto"},
    }
)


class TestResolvePackSettings(unittest.TestCase):
    def test_config_values_fill_gaps(self) -> None:
        settings = pack_flow.resolve_pack_settings(PackArgs(), CONFIG)
        self.assertEqual(settings.backup_dir, Path("/backup"))
        self.assertEqual(settings.work_dir, Path("/spool"))
        self.assertEqual(settings.password_file, Path("/etc/pw"))
        self.assertEqual(settings.block_size, 512)
        self.assertEqual(settings.max_volume_size, 8192)
        self.assertEqual(settings.cipher, "age")
        self.assertEqual(settings.jobs, "auto")
        self.assertEqual(settings.files, ())

    def test_command_line_wins(self) -> None:
        args = PackArgs(
            files=["a.tar.bz2"],
            work_dir="/tmp/work",
            block_size=100,
            max_volume_size=1000,
            cipher="gpg",
            jobs="2",
        )
        settings = pack_flow.resolve_pack_settings(args, CONFIG)
        self.assertEqual(settings.files, (Path("a.tar.bz2"),))
        self.assertEqual(settings.work_dir, Path("/tmp/work"))
        self.assertEqual(settings.block_size, 100)
        self.assertEqual(settings.max_file_size, 4096)
        self.assertEqual(settings.max_volume_size, 1000)
        self.assertEqual(settings.cipher, "gpg")
        self.assertEqual(settings.jobs, "2")

    def test_mandatory_options(self) -> None:
        empty = parse_app_config({})
        with self.assertRaisesRegex(ValueError, "<backup_dir>"):
            pack_flow.resolve_pack_settings(PackArgs(work_dir="/w", pwfile="/p"), empty)
        with self.assertRaisesRegex(ValueError, "<work_dir>"):
            pack_flow.resolve_pack_settings(PackArgs(backup_dir="/b", pwfile="/p"), empty)
        with self.assertRaisesRegex(ValueError, "<password_file>"):
            pack_flow.resolve_pack_settings(PackArgs(backup_dir="/b", work_dir="/w"), empty)

    def test_dry_run_and_plan_relax_requirements(self) -> None:
        empty = parse_app_config({})
        settings = pack_flow.resolve_pack_settings(
            PackArgs(files=["x"], work_dir="/w", dry_run=True), empty
        )
        self.assertIsNone(settings.password_file)
        settings = pack_flow.resolve_pack_settings(
            PackArgs(files=["x"]), empty, require_work_dir=False
        )
        self.assertIsNone(settings.work_dir)


class TestRunPack(unittest.TestCase):
    def setUp(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.root = Path(tmpdir.name)
        self.source = write_file(self.root / "backups" / "home.0.20260101.tar.bz2", 3_000)

    def _settings(self, **overrides) -> pack_flow.PackSettings:
        args = PackArgs(
            files=[str(self.source)],
            work_dir=str(self.root / "spool"),
            pwfile=str(self.root / "pw"),
            block_size=100,
            max_file_size=1_000,
            max_volume_size=10_000,
            cipher="age",
        )
        for key, value in overrides.items():
            setattr(args, key, value)
        return pack_flow.resolve_pack_settings(args, parse_app_config({}))

    def test_creates_work_directory_and_packs(self) -> None:
        write_passphrase(self.root / "pw")
        cipher = PlainCopyCipher()
        with mock.patch.object(pack_flow, "build_cipher", return_value=cipher):
            result = pack_flow.run_pack(self._settings(), quiet=True)
        self.assertTrue(result.ok)
        self.assertEqual(len(result.parts), 3)
        self.assertEqual(len(cipher.calls), 3)
        self.assertTrue((self.root / "spool" / "1").is_dir())

    def test_unreadable_passphrase_stops_before_packing(self) -> None:
        cipher = PlainCopyCipher()
        with mock.patch.object(pack_flow, "build_cipher", return_value=cipher):
            with self.assertRaises(PassphraseError):
                pack_flow.run_pack(self._settings(), quiet=True)
        self.assertEqual(cipher.calls, [])

    def test_work_directory_problems_are_fatal(self) -> None:
        (self.root / "spool").write_text("in the way", encoding="utf-8")
        with self.assertRaises(WorkDirectoryError):
            pack_flow.run_pack(self._settings(), quiet=True)

    def test_missing_gpg_binary(self) -> None:
        write_passphrase(self.root / "pw")
        with mock.patch.object(pack_flow, "check_gpg", return_value=False):
            with self.assertRaisesRegex(RuntimeError, "gpg not found"):
                pack_flow.run_pack(self._settings(cipher="gpg"), quiet=True)

    def test_settings_without_paths_are_rejected(self) -> None:
        settings = dataclasses.replace(self._settings(), work_dir=None)
        with self.assertRaisesRegex(ValueError, "mandatory option <work_dir> not defined"):
            pack_flow.run_pack(settings, quiet=True)

        settings = dataclasses.replace(self._settings(), password_file=None)
        with self.assertRaisesRegex(ValueError, "mandatory option <password_file> not defined"):
            pack_flow.run_pack(settings, quiet=True)

    def test_age_refuses_parts_too_large_for_memory(self) -> None:
        write_passphrase(self.root / "pw")
        settings = self._settings(max_file_size=2_000_000_000, max_volume_size=4_000_000_000)
        with self.assertRaisesRegex(ValueError, "age keeps each part in memory"):
            pack_flow.run_pack(settings, quiet=True)

        with mock.patch.object(pack_flow, "build_cipher", return_value=PlainCopyCipher()):
            result = pack_flow.run_pack(settings, quiet=True)
        self.assertTrue(result.ok)

    def test_preset_cancel_writes_nothing(self) -> None:
        write_passphrase(self.root / "pw")
        cancel = threading.Event()
        cancel.set()
        cipher = PlainCopyCipher()
        with mock.patch.object(pack_flow, "build_cipher", return_value=cipher):
            result = pack_flow.run_pack(self._settings(), quiet=True, cancel=cancel)
        self.assertTrue(result.cancelled)
        self.assertEqual(cipher.calls, [])


class TestCancelOnSignals(unittest.TestCase):
    def test_signal_sets_event_and_handlers_are_restored(self) -> None:
        before = signal.getsignal(signal.SIGTERM)
        cancel = threading.Event()
        with pack_flow._cancel_on_signals(cancel):
            handler = signal.getsignal(signal.SIGTERM)
            self.assertIsNot(handler, before)
            with self.assertLogs("offsite.cli.flows.pack", level="WARNING"):
                handler(signal.SIGTERM, None)
        self.assertTrue(cancel.is_set())
        self.assertIs(signal.getsignal(signal.SIGTERM), before)


if __name__ == "__main__":
    unittest.main()
