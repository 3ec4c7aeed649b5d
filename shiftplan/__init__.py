"""Shift planning core for a two-area food production line.

Modules:
- config: load and validate configuration (YAML or JSON)
- errors: fatal scheduling errors
- domain: SQLAlchemy models, repositories and the typed order view
- services: time helpers, sequencing, matching, dependencies, validation,
  recommendations and analytics
- engine: preparation (forward) and filling (backward) passes and the
  run orchestrator
- io: CSV import and the demo dataset
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "errors",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
