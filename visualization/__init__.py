"""Visualization utilities for SplitSpend dashboards."""

from .charts import bucket_categories, build_bucket_chart, build_bucket_frame, build_category_chart
from .theme import theme_tokens

__all__ = [
    "bucket_categories",
    "build_bucket_chart",
    "build_bucket_frame",
    "build_category_chart",
    "theme_tokens",
]
