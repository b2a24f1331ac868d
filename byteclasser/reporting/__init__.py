"""Result table output."""

from .writer import label_columns, build_table_rows, write_results

__all__ = ["label_columns", "build_table_rows", "write_results"]
