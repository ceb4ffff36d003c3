# folio/__init__.py
"""Multi-currency portfolio valuation and aggregation."""

__version__ = "0.1.0"
