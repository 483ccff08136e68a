"""Shared Plotly theme tokens for SplitSpend visualizations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable


@dataclass(frozen=True)
class ThemeTokens:
    day_format: str = "%a %d %b"
    week_format: str = "Week of %d %b"
    label_color: str = "#475569"
    label_font: str = "Inter"
    label_size: int = 12
    grid_color: str = "rgba(148, 163, 184, 0.25)"
    neutral_grey: str = "#94A3B8"
    neutral_white: str = "#FFFFFF"
    category_palette: tuple[str, ...] = (
        "#84CC16",
        "#8B5CF6",
        "#14B8A6",
        "#06B6D4",
        "#F59E0B",
        "#F97316",
        "#A855F7",
        "#6366F1",
        "#3B82F6",
        "#10B981",
        "#D946EF",
        "#EAB308",
        "#EF4444",
        "#0EA5E9",
        "#EC4899",
        "#F43F5E",
    )

    def color_sequence(self, size: int) -> list[str]:
        palette = list(self.category_palette)
        repeats = (size // len(palette)) + 1
        return (palette * repeats)[:size]

    def category_colors(self, category_ids: Iterable[Hashable]) -> dict[Hashable, str]:
        """Assign palette colors to category ids in the given order."""

        ids = list(dict.fromkeys(category_ids))
        return dict(zip(ids, self.color_sequence(len(ids))))


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    """Return the shared visualization tokens.

    The tokens are frozen. Charts get category colors from one
    :meth:`ThemeTokens.category_colors` map so a category keeps its color
    across charts.
    """

    return _TOKENS
