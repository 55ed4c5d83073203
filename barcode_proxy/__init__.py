"""
Barcode Lookup Proxy - aggregation layer for third-party barcode lookup APIs.

This package resolves a product barcode into normalized product metadata by
querying a primary provider with fallback to a secondary one, caching
results and rate limiting outbound calls.
"""

__version__ = "0.1.0"
