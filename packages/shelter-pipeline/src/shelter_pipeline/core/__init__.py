"""Ingestion core: normalization, resolution and assembly of shelter records."""
