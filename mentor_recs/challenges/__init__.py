"""Daily challenge generation, validation and completion analytics."""
