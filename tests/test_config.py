import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mpd_records.config import DecoderSettings, Settings, find_config


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()
        self.assertFalse(settings.decoder.require_file)
        self.assertEqual(settings.log_level, "INFO")

    def test_load_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "mpd-records.yaml"
            path.write_text("decoder:\n  require_file: true\nlog_level: debug\n", encoding="utf-8")
            settings = Settings.load(path)
        self.assertEqual(settings.decoder, DecoderSettings(require_file=True))
        self.assertEqual(settings.log_level, "DEBUG")

    def test_load_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "mpd-records.yaml"
            path.write_text("", encoding="utf-8")
            self.assertEqual(Settings.load(path), Settings())


class TestFindConfig(unittest.TestCase):
    def test_explicit_path_wins(self) -> None:
        explicit = Path("/etc/mpd-records.yaml")
        self.assertEqual(find_config(explicit), explicit)

    def test_discovers_file_in_cwd(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            with mock.patch("mpd_records.config.Path.cwd", return_value=tmp):
                self.assertIsNone(find_config(None))
                (tmp / "mpd-records.yml").write_text("{}", encoding="utf-8")
                self.assertEqual(find_config(None), tmp / "mpd-records.yml")


if __name__ == "__main__":
    unittest.main()
