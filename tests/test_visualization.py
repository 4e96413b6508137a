"""Rendering tests: the lines drawn must be the fitted lines."""

import os
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from penguin_paradox.config import load_config
from penguin_paradox.dataset import load_penguins
from penguin_paradox.trend import analyze_paradox
from penguin_paradox.visualization import ParadoxVisualizer


class ParadoxVisualizerTests(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.config = load_config()
        cls.df = load_penguins()
        cls.result = analyze_paradox(cls.df, "bill_length_mm", "bill_depth_mm", "species")
        cls.visualizer = ParadoxVisualizer(cls.config)

    def tearDown(self):
        plt.close("all")

    def test_overall_axes_has_single_fitted_line(self):
        fig, ax = plt.subplots()
        self.visualizer.plot_overall(ax, self.df, self.result)
        lines = ax.get_lines()
        self.assertEqual(len(lines), 1)
        xs, ys = lines[0].get_data()
        np.testing.assert_allclose(ys, self.result.overall.predict(xs))
        self.assertEqual(ax.get_xlabel(), "Bill length (mm)")
        self.assertEqual(ax.get_ylabel(), "Bill depth (mm)")
        self.assertEqual(ax.get_title(), "All penguins together")

    def test_group_axes_has_one_line_per_species(self):
        fig, ax = plt.subplots()
        self.visualizer.plot_by_group(ax, self.df, self.result)
        lines = ax.get_lines()
        self.assertEqual(len(lines), 3)
        for line, fit in zip(lines, self.result.by_group.values()):
            xs, ys = line.get_data()
            self.assertAlmostEqual(xs[0], fit.x_min)
            self.assertAlmostEqual(xs[-1], fit.x_max)
            np.testing.assert_allclose(ys, fit.predict(xs))
        legend_texts = [t.get_text() for t in ax.get_legend().get_texts()]
        self.assertTrue(any(text.startswith("Gentoo") for text in legend_texts))

    def test_group_lines_use_configured_palette(self):
        fig, ax = plt.subplots()
        self.visualizer.plot_by_group(ax, self.df, self.result)
        gentoo_line = ax.get_lines()[2]
        self.assertEqual(matplotlib.colors.to_hex(gentoo_line.get_color()), "#159090")

    def test_comparison_figure_has_two_panels(self):
        fig = self.visualizer.create_comparison_figure(self.df, self.result)
        self.assertEqual(len(fig.axes), 2)
        self.assertEqual(len(fig.axes[0].get_lines()), 1)
        self.assertEqual(len(fig.axes[1].get_lines()), 3)

    def test_render_all_writes_three_images(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            paths = self.visualizer.render_all(self.df, self.result, tmpdir)
            self.assertEqual(set(paths), {"overall", "by_group", "comparison"})
            for path in paths.values():
                self.assertTrue(os.path.exists(path))
                self.assertGreater(os.path.getsize(path), 0)
            self.assertEqual(os.path.basename(paths["comparison"]), "side_by_side.png")
        self.assertEqual(plt.get_fignums(), [])


if __name__ == "__main__":
    unittest.main()
