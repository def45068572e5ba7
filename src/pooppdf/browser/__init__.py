"""Browser automation modules (Playwright).

``session`` owns the Chromium process and page, ``navigation`` loads the
target URL, and ``readiness`` decides when the page may be captured.
"""
