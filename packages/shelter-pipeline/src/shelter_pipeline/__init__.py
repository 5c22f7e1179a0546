"""Cooling shelter dataset ingestion and query package."""
