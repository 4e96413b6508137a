"""Tests for the Markdown narrative and figure captions."""

import os
import tempfile
import unittest

import pandas as pd

from penguin_paradox.config import load_config
from penguin_paradox.dataset import load_penguins
from penguin_paradox.narrative import build_report, render_caption, write_report
from penguin_paradox.trend import analyze_paradox


class NarrativeTests(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.config = load_config()
        cls.df = load_penguins()
        cls.result = analyze_paradox(cls.df, "bill_length_mm", "bill_depth_mm", "species")
        cls.figure_paths = {
            "overall": os.path.join("out", "overall_trend.png"),
            "by_group": os.path.join("out", "species_trends.png"),
            "comparison": os.path.join("out", "side_by_side.png"),
        }
        cls.report = build_report(cls.df, cls.result, cls.figure_paths, cls.config, base_dir="out")

    def test_report_links_all_figures_relative_to_report(self):
        for name in ["overall_trend.png", "species_trends.png", "side_by_side.png"]:
            self.assertIn(f"]({name})", self.report)

    def test_report_quotes_fitted_slopes(self):
        self.assertIn(f"{self.result.overall.slope:+.3f}", self.report)
        for fit in self.result.by_group.values():
            self.assertIn(f"slope {fit.slope:+.3f}", self.report)

    def test_report_describes_the_reversal(self):
        self.assertIn("flips", self.report)
        self.assertIn("positive for Adelie, Chinstrap and Gentoo", self.report)
        self.assertIn("points the opposite way from the overall line", self.report)

    def test_report_mentions_dropped_rows_and_confounder(self):
        self.assertIn("1 bird(s) without both", self.report)
        self.assertIn("**confounding variable**", self.report)
        self.assertIn("Gentoo has the smallest average bill depth", self.report)

    def test_report_has_glossary(self):
        self.assertIn("## Glossary", self.report)
        self.assertIn("**Ordinary least squares**", self.report)

    def test_overall_caption(self):
        caption = render_caption(self.config, "overall", self.result)
        self.assertIn("Across all 69 penguins", caption)
        self.assertIn("bill depth (mm) decreases", caption)
        self.assertNotIn("\n", caption)

    def test_wording_changes_without_reversal(self):
        df = pd.DataFrame({
            "species": ["Adelie"] * 3 + ["Gentoo"] * 3,
            "bill_length_mm": [35.0, 38.0, 41.0, 45.0, 48.0, 51.0],
            "bill_depth_mm": [17.0, 18.0, 19.0, 19.5, 20.5, 21.5],
        })
        result = analyze_paradox(df, "bill_length_mm", "bill_depth_mm", "species")
        self.assertFalse(result.is_reversal)
        report = build_report(df, result, {}, self.config)
        self.assertIn("does not simply flip", report)
        self.assertIn("does not show a full reversal", report)

    def test_prose_follows_configured_columns(self):
        config = dict(self.config, analysis={"x": "flipper_length_mm", "y": "body_mass_g"})
        result = analyze_paradox(self.df, "flipper_length_mm", "body_mass_g", "species")
        report = build_report(self.df, result, {}, config)
        self.assertNotIn("bill", report.lower())
        self.assertIn("flipper length (mm)", report)
        self.assertIn("body mass (g)", report)

    def test_write_report(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_report(self.report, os.path.join(tmpdir, "nested", "report.md"))
            with open(path, encoding="utf-8") as f:
                self.assertEqual(f.read(), self.report)


if __name__ == "__main__":
    unittest.main()
