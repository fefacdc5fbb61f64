import io
import json
import logging
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from mpd_records.cli import decode, main
from mpd_records.config import Settings

SONG_RESPONSE = "file: a.flac\nTime: 125\nId: 7\nPos: 3\nTitle: T\nOK\n"


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        self._handlers = list(root.handlers)
        self._level = root.level

    def tearDown(self) -> None:
        root = logging.getLogger()
        root.handlers[:] = self._handlers
        root.setLevel(self._level)

    def _run(self, argv: list[str]) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_song_file_to_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "response.txt"
            path.write_text(SONG_RESPONSE, encoding="utf-8")
            code, out, _ = self._run(["--log-level", "WARNING", "song", str(path)])
        self.assertEqual(code, 0)
        record = json.loads(out)
        self.assertEqual(record["file"], "a.flac")
        self.assertEqual(record["duration"], 125)
        self.assertEqual(record["place"], {"id": [7], "pos": 3, "prio": 0})

    def test_reads_stdin(self) -> None:
        with mock.patch("sys.stdin", io.StringIO("songs: 3\nfoo: bar\nOK\n")):
            code, out, _ = self._run(["--log-level", "WARNING", "stats"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["songs"], 3)

    def test_decode_error_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "response.txt"
            path.write_text("file: a.flac\nTime: abc\nOK\n", encoding="utf-8")
            code, out, err = self._run(["--log-level", "WARNING", "song", str(path)])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Time", err)

    def test_config_requires_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            config = tmp / "mpd-records.yaml"
            config.write_text("decoder:\n  require_file: true\n", encoding="utf-8")
            path = tmp / "response.txt"
            path.write_text("Title: T\nOK\n", encoding="utf-8")
            code, _, err = self._run(
                ["--config", str(config), "--log-level", "WARNING", "song", str(path)]
            )
        self.assertEqual(code, 1)
        self.assertIn("file", err)


class TestDecode(unittest.TestCase):
    def test_playlists(self) -> None:
        lines = [
            "playlist: morning\n",
            "Last-Modified: 2001-09-09T01:46:40Z\n",
            "OK\n",
        ]
        self.assertEqual(
            decode("playlists", lines, Settings()),
            [{"name": "morning", "last_mod": 1000000000}],
        )

    def test_songs(self) -> None:
        lines = ["file: a\n", "file: b\n", "OK\n"]
        records = decode("songs", lines, Settings())
        self.assertEqual([r["file"] for r in records], ["a", "b"])


if __name__ == "__main__":
    unittest.main()
