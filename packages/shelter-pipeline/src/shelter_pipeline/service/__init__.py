"""HTTP service exposing shelter queries over the ingested catalog."""
