"""
Ingestion layer — catalog sources, CSV parsing, loading with fallback.

Submodules:
  catalog_csv    — quote-aware CSV parser for spreadsheet exports
  catalog_source — JSON / CSV URL sources (GitHub blob URL normalization)
  catalog_loader — async fetch + decode, fallback on failure, CatalogSession
  fallback       — bundled three-board sample catalog

Source selection lives in config ([catalog] kind / json_url / csv_url) and
can be overridden with SURFBOARD_FINDER_SOURCE_KIND / _JSON_URL / _CSV_URL.
"""
