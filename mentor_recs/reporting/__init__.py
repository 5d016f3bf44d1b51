"""
mentor_recs.reporting: report files and terminal formatting.

Modules:
  reporter   — CSV/JSON report writers for recommendation lists.
  formatters — ASCII terminal formatters for Typer CLI commands.
"""
