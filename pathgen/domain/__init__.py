"""Data model and generation algorithm for grid paths."""
