from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest

from constrained_axes.cli import main


_LAYOUT = {
    "plot_area": {"width": 1000, "height": 1000},
    "axes": {
        "xaxis": {"range": [0, 10]},
        "yaxis": {"range": [0, 5]},
    },
    "constraint_groups": [{"x": 1, "y": 1}],
}


class CliTests(unittest.TestCase):
    def _write(self, tmp: str) -> Path:
        path = Path(tmp) / "layout.json"
        path.write_text(json.dumps(_LAYOUT), encoding="utf-8")
        return path

    def test_enforce_prints_constrained_layout(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp)
            buf = io.StringIO()
            with contextlib.redirect_stdout(buf):
                code = main(["enforce", str(path), "--passes", "2"])
        self.assertEqual(code, 0)
        out = json.loads(buf.getvalue())
        self.assertTrue(out["satisfied"])
        self.assertAlmostEqual(out["axes"]["yaxis"]["range"][0], -2.5)
        self.assertAlmostEqual(out["axes"]["yaxis"]["range"][1], 7.5)

    def test_check_exits_nonzero_when_unsatisfied(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp)
            buf = io.StringIO()
            with contextlib.redirect_stdout(buf):
                code = main(["check", str(path)])
        self.assertEqual(code, 1)
        out = json.loads(buf.getvalue())
        self.assertAlmostEqual(out["residuals"][0], 2.0)
        self.assertFalse(out["satisfied"])


if __name__ == "__main__":
    unittest.main()
