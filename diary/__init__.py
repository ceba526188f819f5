"""Diary service: diary entries, AI recommendations, scheduled email, PAT auth."""

__version__ = "1.0.0"
