"""Record mapping at the ingestion boundary and JSON-safe export of results."""
