"""Tests for the live-cmn command line interface."""

from __future__ import annotations

import contextlib
import io
import tempfile
import unittest
from pathlib import Path

import numpy as np

from live_cmn.cli import main


class TestCli(unittest.TestCase):
    """Tests for live_cmn.cli.main."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_normalizes_files_in_order(self) -> None:
        """Each file is one utterance; state is shared across files."""
        np.save(self.tmp / "a.npy", np.array([[2.0], [6.0]]))
        np.save(self.tmp / "b.npy", np.array([[10.0]]))
        out_dir = self.tmp / "out"
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            main(
                [
                    str(self.tmp / "a.npy"),
                    str(self.tmp / "b.npy"),
                    "-o",
                    str(out_dir),
                    "--initial-mean",
                    "0",
                    "--window",
                    "4",
                    "--shift-window",
                    "3",
                ]
            )
        np.testing.assert_array_equal(np.load(out_dir / "a_cmn.npy"), [[2.0], [6.0]])
        np.testing.assert_array_equal(np.load(out_dir / "b_cmn.npy"), [[6.0]])
        self.assertIn("Final mean", stdout.getvalue())

    def test_dimension_mismatch_exits(self) -> None:
        """Files with different widths abort with exit status 1."""
        np.save(self.tmp / "a.npy", np.zeros((3, 13)))
        np.save(self.tmp / "b.npy", np.zeros((3, 12)))
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([str(self.tmp / "a.npy"), str(self.tmp / "b.npy")])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("not equal sum array length", stderr.getvalue())

    def test_rejects_npz_archive(self) -> None:
        """An .npz archive exits with status 1 and a clean message."""
        np.savez(self.tmp / "a.npz", features=np.zeros((3, 13)))
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as ctx:
                main([str(self.tmp / "a.npz")])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("expected a single .npy array", stderr.getvalue())

    def test_rejects_non_2d_input(self) -> None:
        """A 1-D feature file is an error."""
        np.save(self.tmp / "a.npy", np.zeros(5))
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main([str(self.tmp / "a.npy")])


if __name__ == "__main__":
    unittest.main(verbosity=2)
