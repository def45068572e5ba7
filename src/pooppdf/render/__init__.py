"""Print-layout construction for the PDF renderer."""

from pooppdf.render.options import build_print_options

__all__ = ["build_print_options"]
