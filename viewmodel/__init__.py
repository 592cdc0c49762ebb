"""viewmodel - Server-side JSON view-model components.

Builds the JSON payloads a fixed-contract frontend renders:
- Tables (typed fields, locale/unit formatting, footers, CSV/Excel export)
- Toolbar buttons, URLs and query wrappers used by tables
- FastAPI response adapters for table data endpoints
"""

__version__ = "0.1.0"
