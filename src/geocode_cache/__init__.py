"""Cache-first geocoding proxy."""
