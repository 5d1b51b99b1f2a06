"""Universal registrar support."""
