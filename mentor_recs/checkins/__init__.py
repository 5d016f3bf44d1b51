"""Journaling check-ins: path prompts, mood-aware replies and follow-up questions."""
