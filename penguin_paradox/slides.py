#!/usr/bin/env python3
"""
Slide deck for the Simpson's Paradox narrative: title, one slide per figure, summary table.
"""

import os
from datetime import datetime
from typing import Any, Dict, Optional

import pandas as pd
from PIL import Image
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN, MSO_AUTO_SIZE
from pptx.util import Inches, Pt
import logging

from .config import FIGURE_KEYS, get_figure_info
from .narrative import render_caption
from .trend import ParadoxResult

# Set up module logger
logger = logging.getLogger(__name__)

# Slide dimensions and margins (in inches)
SLIDE_WIDTH = 13.33  # 16:9 aspect ratio
SLIDE_HEIGHT = 7.5

MARGIN_LEFT = 0.15
MARGIN_RIGHT = 0.15
MARGIN_TOP = 0.15
MARGIN_BOTTOM = 0.15

# Title area
TITLE_HEIGHT = 0.4
TITLE_TOP = MARGIN_TOP
TITLE_LEFT = MARGIN_LEFT

# Content area calculations
CONTENT_LEFT = MARGIN_LEFT
CONTENT_TOP = TITLE_TOP + TITLE_HEIGHT + 0.1
CONTENT_WIDTH = SLIDE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT
CONTENT_HEIGHT = SLIDE_HEIGHT - CONTENT_TOP - MARGIN_BOTTOM

CAPTION_HEIGHT = 0.5
TABLE_ROW_HEIGHT = 0.35

BLANK_LAYOUT = 6


class SlideDeck:
    """Class for creating the PowerPoint version of the narrative."""

    def __init__(self):
        self.prs = Presentation()
        self.prs.slide_width = Inches(SLIDE_WIDTH)
        self.prs.slide_height = Inches(SLIDE_HEIGHT)

    def _add_title(self, slide, title: str):
        """Add standardized title."""
        title_box = slide.shapes.add_textbox(
            Inches(TITLE_LEFT),
            Inches(TITLE_TOP),
            Inches(CONTENT_WIDTH),
            Inches(TITLE_HEIGHT)
        )
        title_box.text = title
        title_box.text_frame.paragraphs[0].font.size = Pt(18)
        title_box.text_frame.paragraphs[0].font.bold = True
        return title_box

    def _add_text(self, slide, text: str, left: float, top: float,
                  width: float, height: float, font_size: int = 12):
        text_box = slide.shapes.add_textbox(Inches(left), Inches(top), Inches(width), Inches(height))
        text_frame = text_box.text_frame
        text_frame.word_wrap = True
        text_frame.auto_size = MSO_AUTO_SIZE.TEXT_TO_FIT_SHAPE

        p = text_frame.paragraphs[0]
        p.text = text
        p.font.size = Pt(font_size)
        return text_box

    def _add_caption(self, slide, caption: str, left: float, top: float, width: float, font_size: int = 12):
        """Add an italic gray caption below a figure."""
        if not caption.strip():
            return None

        caption_box = slide.shapes.add_textbox(Inches(left), Inches(top), Inches(width), Inches(CAPTION_HEIGHT))
        caption_frame = caption_box.text_frame
        caption_frame.word_wrap = True

        p = caption_frame.paragraphs[0]
        p.text = caption
        p.font.size = Pt(font_size)
        p.font.italic = True
        p.font.color.rgb = RGBColor(100, 100, 100)
        p.alignment = PP_ALIGN.CENTER
        return caption_box

    def _add_figure(self, slide, figure_path: str, left: float, top: float, width: float, height: float):
        """
        Add figure centered in the given box while preserving aspect ratio.

        Args:
            slide: PowerPoint slide object
            figure_path: Path to the image file
            left, top: Position of the box in inches
            width, height: Size of the box in inches
        """
        if not os.path.exists(figure_path):
            raise FileNotFoundError(f"Figure not found: {figure_path}")

        with Image.open(figure_path) as img:
            img_width, img_height = img.size
            aspect_ratio = img_width / img_height

        if height * aspect_ratio <= width:
            final_width, final_height = height * aspect_ratio, height
        else:
            final_width, final_height = width, width / aspect_ratio

        final_left = left + (width - final_width) / 2
        return slide.shapes.add_picture(
            figure_path, Inches(final_left), Inches(top), Inches(final_width), Inches(final_height)
        )

    def _add_table(self, slide, df: pd.DataFrame, left: float, top: float, width: float):
        """Add a DataFrame as a table; the index becomes the first column."""
        n_rows, n_cols = len(df) + 1, len(df.columns) + 1
        height = n_rows * TABLE_ROW_HEIGHT
        table = slide.shapes.add_table(n_rows, n_cols, Inches(left), Inches(top),
                                       Inches(width), Inches(height)).table

        headers = [df.index.name or ''] + [str(col) for col in df.columns]
        for j, header in enumerate(headers):
            table.cell(0, j).text = header

        for i, (idx, row) in enumerate(df.iterrows(), start=1):
            table.cell(i, 0).text = str(idx)
            for j, value in enumerate(row, start=1):
                table.cell(i, j).text = self._format_cell_value(value)

        for i in range(n_rows):
            for j in range(n_cols):
                for paragraph in table.cell(i, j).text_frame.paragraphs:
                    paragraph.font.size = Pt(12)
                    paragraph.font.bold = i == 0
        return table

    def _format_cell_value(self, value) -> str:
        if isinstance(value, float):
            return f"{value:.3f}"
        return str(value)

    def add_title_slide(self, title: str, subtitle: str = ''):
        slide = self.prs.slides.add_slide(self.prs.slide_layouts[BLANK_LAYOUT])
        title_box = self._add_title(slide, title)
        title_box.text_frame.paragraphs[0].font.size = Pt(32)
        title_box.top = Inches(SLIDE_HEIGHT / 2 - 1)
        if subtitle:
            self._add_text(slide, subtitle, CONTENT_LEFT, SLIDE_HEIGHT / 2, CONTENT_WIDTH, 1.0, font_size=16)
        return slide

    def add_figure_slide(self, title: str, figure_path: str, caption: str = ''):
        slide = self.prs.slides.add_slide(self.prs.slide_layouts[BLANK_LAYOUT])
        self._add_title(slide, title)
        figure_height = CONTENT_HEIGHT - CAPTION_HEIGHT
        self._add_figure(slide, figure_path, CONTENT_LEFT, CONTENT_TOP, CONTENT_WIDTH, figure_height)
        self._add_caption(slide, caption, CONTENT_LEFT, CONTENT_TOP + figure_height, CONTENT_WIDTH)
        return slide

    def add_table_slide(self, title: str, df: pd.DataFrame, text: str = ''):
        slide = self.prs.slides.add_slide(self.prs.slide_layouts[BLANK_LAYOUT])
        self._add_title(slide, title)
        top = CONTENT_TOP
        if text:
            self._add_text(slide, text, CONTENT_LEFT, top, CONTENT_WIDTH, 1.0, font_size=14)
            top += 1.1
        self._add_table(slide, df, CONTENT_LEFT, top, min(CONTENT_WIDTH, 9.0))
        return slide

    def save(self, filename: Optional[str] = None, output_dir: str = '.') -> str:
        """Save presentation."""
        os.makedirs(output_dir, exist_ok=True)

        if not filename:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filename = f"simpsons_paradox_{timestamp}.pptx"
        elif not filename.endswith('.pptx'):
            filename = f"{filename}.pptx"

        filepath = os.path.join(output_dir, filename)
        self.prs.save(filepath)
        logger.info(f"Saved deck to {filepath}")
        return filepath


def build_deck(result: ParadoxResult, figure_paths: Dict[str, str], config: Dict[str, Any]) -> SlideDeck:
    """
    Assemble the deck: title slide, the three figures, and the table of fitted lines.

    Args:
        result: Fitted trends
        figure_paths: Figure key -> image path
        config: Loaded configuration dictionary

    Returns:
        SlideDeck ready to save
    """
    deck = SlideDeck()
    deck.add_title_slide("Simpson's Paradox in the Palmer Penguins",
                         "One dataset, two opposite trends")

    for key in FIGURE_KEYS:
        if key not in figure_paths:
            continue
        info = get_figure_info(config, key)
        deck.add_figure_slide(info['title'], figure_paths[key], render_caption(config, key, result))

    if result.is_reversal:
        summary = f"Overall slope {result.overall.slope:+.3f}; every group slope has the opposite sign."
    else:
        summary = f"Overall slope {result.overall.slope:+.3f}; the group slopes do not all reverse it."
    deck.add_table_slide("Fitted lines", result.to_frame(), summary)
    return deck
