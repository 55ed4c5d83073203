"""
Domain package for the Barcode Lookup Proxy.

Contains the canonical product model, the typed provider records and the
request/response schemas. The domain layer performs no I/O.
"""
