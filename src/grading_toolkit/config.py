"""
Module: config

Purpose:
    Configuration dataclass for result exports. Immutable configuration
    with validation on construction. Defaults reproduce the reference
    landscape A4 layout (lengths in millimetres).

Key Classes:
    - ExportConfig: Layout and naming options for CSV/PDF exports

Used By:
    - output.pdf_renderer: Page geometry and fonts
    - controller: Output file names
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for result exports (immutable).

    Attributes:
        margin_mm: Page margin on every side
        title_top_mm: Baseline of the title, measured from the page top
        title_font_size: Title font size in points
        legend_top_mm: Top edge of the legend box on page 1
        legend_height_mm: Height of the legend box
        legend_gap_mm: Space between legend and table
        legend_square_mm: Size of the legend color swatches
        legend_padding_mm: Left padding inside the legend box
        legend_item_gap_mm: Gap between the two legend entries
        font_size: Table font size in points
        question_column_width_mm: Preferred width of each question column
        min_question_column_width_mm: Lower bound when columns are squeezed
        csv_filename: File name used for the CSV export

    Example:
        >>> config = ExportConfig(font_size=8)
    """

    margin_mm: float = 14.0
    title_top_mm: float = 15.0
    title_font_size: float = 11.0
    legend_top_mm: float = 25.0
    legend_height_mm: float = 12.0
    legend_gap_mm: float = 5.0
    legend_square_mm: float = 4.0
    legend_padding_mm: float = 4.0
    legend_item_gap_mm: float = 10.0
    font_size: float = 9.0
    question_column_width_mm: float = 8.0
    min_question_column_width_mm: float = 4.0
    csv_filename: str = "resultados_provas.csv"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.margin_mm < 0:
            raise ValueError(f"margin_mm must be non-negative: {self.margin_mm}")
        if self.font_size <= 0 or self.title_font_size <= 0:
            raise ValueError("font sizes must be positive")
        if self.min_question_column_width_mm <= 0:
            raise ValueError(
                f"min_question_column_width_mm must be positive: {self.min_question_column_width_mm}"
            )
        if self.question_column_width_mm < self.min_question_column_width_mm:
            raise ValueError("question_column_width_mm must be >= min_question_column_width_mm")
        if self.legend_top_mm + self.legend_height_mm <= self.title_top_mm:
            raise ValueError("legend must sit below the title")
        if not self.csv_filename.endswith(".csv"):
            raise ValueError(f"csv_filename must end with .csv: {self.csv_filename!r}")

    @property
    def table_top_mm(self) -> float:
        """Where the table starts on page 1."""
        return self.legend_top_mm + self.legend_height_mm + self.legend_gap_mm
