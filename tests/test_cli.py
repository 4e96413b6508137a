"""End-to-end runs through run_analysis and the command-line entry point."""

import contextlib
import io
import os
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")
import pandas as pd
import yaml

from penguin_paradox import __version__
from penguin_paradox.cli import main
from penguin_paradox.pipeline import run_analysis


class RunAnalysisTests(unittest.TestCase):

    def test_run_writes_figures_report_and_deck(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            artifacts = run_analysis(output_dir=tmpdir, make_slides=True)
            self.assertTrue(artifacts.result.is_reversal)
            self.assertEqual(len(artifacts.figure_paths), 3)
            for path in artifacts.figure_paths.values():
                self.assertTrue(os.path.exists(path))
            self.assertTrue(os.path.exists(artifacts.report_path))
            self.assertTrue(artifacts.deck_path.endswith("simpsons_paradox.pptx"))
            self.assertTrue(os.path.exists(artifacts.deck_path))

    def test_run_without_slides(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            artifacts = run_analysis(output_dir=tmpdir)
            self.assertIsNone(artifacts.deck_path)
            self.assertEqual(len(artifacts.data), 70)


class CliTests(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _run(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def _degenerate_config(self):
        """Config pointing at a CSV where Gentoo has a single bird."""
        csv_path = os.path.join(self.tmpdir.name, "tiny.csv")
        pd.DataFrame({
            "species": ["Adelie", "Adelie", "Adelie", "Gentoo"],
            "bill_length_mm": [36.0, 38.0, 40.0, 47.0],
            "bill_depth_mm": [18.0, 18.5, 19.0, 14.5],
        }).to_csv(csv_path, index=False)
        config_path = os.path.join(self.tmpdir.name, "tiny.yaml")
        with open(config_path, "w") as f:
            yaml.safe_dump({"dataset": {"path": csv_path}}, f)
        return config_path

    def test_version(self):
        code, out = self._run(["--version"])
        self.assertEqual(code, 0)
        self.assertIn(__version__, out)

    def test_fits_only_prints_table(self):
        code, out = self._run(["--fits-only"])
        self.assertEqual(code, 0)
        for label in ["Adelie", "Chinstrap", "Gentoo", "All penguins"]:
            self.assertIn(label, out)
        self.assertIn("Reversal: yes", out)

    def test_full_run(self):
        code, out = self._run(["--output-dir", self.tmpdir.name, "--slides"])
        self.assertEqual(code, 0)
        self.assertIn("Report:", out)
        self.assertIn("Slides:", out)
        self.assertTrue(os.path.exists(os.path.join(self.tmpdir.name, "simpsons_paradox.md")))

    def test_degenerate_group_exits_with_error(self):
        config_path = self._degenerate_config()
        code, out = self._run(["--config", config_path, "--output-dir", self.tmpdir.name])
        self.assertEqual(code, 1)
        self.assertNotIn("Report:", out)
        self.assertFalse(os.path.exists(os.path.join(self.tmpdir.name, "simpsons_paradox.md")))


if __name__ == "__main__":
    unittest.main()
