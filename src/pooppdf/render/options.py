"""Build the fixed print layout and optional header/footer templates.

Margins, scale and width are constants so pagination is consistent
regardless of page content. Chromium fills ``pageNumber`` and
``totalPages`` spans in header/footer templates at print time.
"""

from __future__ import annotations

import html

from pooppdf.models.request import CaptureRequest
from pooppdf.models.results import PrintOptions

MARGIN = "80px"
SCALE = 0.8
WIDTH_PX = 1080

TEMPLATE_CSS = "<style>h1 { font-size:10px; width: 100%; }</style>"

PAGE_NUMBERS_HTML = (
    'Page <span class="pageNumber"></span> of <span class="totalPages"></span>'
)


def _centered_heading(inner_html: str) -> str:
    return f'{TEMPLATE_CSS}<h1 align="center">{inner_html}</h1>'


def header_template(title: str) -> str:
    """Header template showing *title* centered on every page."""
    return _centered_heading(html.escape(title, quote=False))


def footer_template() -> str:
    """Footer template showing "Page N of M"."""
    return _centered_heading(PAGE_NUMBERS_HTML)


def build_print_options(request: CaptureRequest) -> PrintOptions:
    """Derive the ``PrintOptions`` for *request*. Pure and deterministic."""
    return PrintOptions(
        output_path=request.output_path,
        display_header_footer=True,
        margin_top=MARGIN,
        margin_bottom=MARGIN,
        scale=SCALE,
        width=WIDTH_PX,
        header_template=header_template(request.title) if request.title else None,
        footer_template=footer_template() if request.show_page_numbers else None,
    )
