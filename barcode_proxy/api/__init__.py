"""HTTP boundary of the Barcode Lookup Proxy."""
