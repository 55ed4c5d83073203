"""Core configuration, logging and exception types for the Barcode Lookup Proxy."""
