"""
Content catalog: read-only books, path insights and challenge templates.

Modules:
  loader — JSON file loading and validation (raises CatalogError).
  store  — Immutable Catalog container with per-path lookups.
"""
