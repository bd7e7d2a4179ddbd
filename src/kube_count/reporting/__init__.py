"""Output rendering for count records."""

from kube_count.reporting.formatting import OutputFormat, format_table, render

__all__ = ["OutputFormat", "format_table", "render"]
