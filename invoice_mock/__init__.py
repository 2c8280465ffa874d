"""Invoice listing mock.

Serves file-backed JSON fixtures for GET /mobile/v1/invoices, keyed by the
subscriber MSISDN found in the query string or the x-querystring header.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
