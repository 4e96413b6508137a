"""Tests for the PowerPoint deck."""

import os
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")
from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE

from penguin_paradox.config import load_config
from penguin_paradox.dataset import load_penguins
from penguin_paradox.slides import SlideDeck, build_deck
from penguin_paradox.trend import analyze_paradox
from penguin_paradox.visualization import ParadoxVisualizer


def _slide_texts(slide):
    return [shape.text_frame.text for shape in slide.shapes if shape.has_text_frame]


class SlideDeckTests(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.tmpdir = tempfile.TemporaryDirectory()
        cls.config = load_config()
        cls.df = load_penguins()
        cls.result = analyze_paradox(cls.df, "bill_length_mm", "bill_depth_mm", "species")
        cls.figure_paths = ParadoxVisualizer(cls.config).render_all(cls.df, cls.result, cls.tmpdir.name)
        deck = build_deck(cls.result, cls.figure_paths, cls.config)
        cls.deck_path = deck.save("deck", cls.tmpdir.name)
        cls.prs = Presentation(cls.deck_path)

    @classmethod
    def tearDownClass(cls):
        cls.tmpdir.cleanup()

    def test_deck_is_saved_with_pptx_suffix(self):
        self.assertTrue(self.deck_path.endswith("deck.pptx"))
        self.assertTrue(os.path.exists(self.deck_path))

    def test_slide_count(self):
        # title + three figures + fitted lines table
        self.assertEqual(len(self.prs.slides), 5)

    def test_figure_slides_carry_picture_and_caption(self):
        for slide in list(self.prs.slides)[1:4]:
            pictures = [shape for shape in slide.shapes if shape.shape_type == MSO_SHAPE_TYPE.PICTURE]
            self.assertEqual(len(pictures), 1)
        captions = _slide_texts(self.prs.slides[1])
        self.assertEqual(captions[0], "All penguins together")
        self.assertTrue(any("Across all 69 penguins" in text for text in captions))

    def test_summary_slide_has_fit_table(self):
        slide = self.prs.slides[4]
        tables = [shape.table for shape in slide.shapes if shape.has_table]
        self.assertEqual(len(tables), 1)
        table = tables[0]
        self.assertEqual(len(table.rows), 5)
        self.assertEqual(table.cell(0, 0).text, "group")
        self.assertEqual(table.cell(4, 0).text, "All penguins")
        self.assertTrue(any("opposite sign" in text for text in _slide_texts(slide)))

    def test_missing_figure_raises(self):
        deck = SlideDeck()
        with self.assertRaises(FileNotFoundError):
            deck.add_figure_slide("Missing", os.path.join(self.tmpdir.name, "none.png"))


if __name__ == "__main__":
    unittest.main()
