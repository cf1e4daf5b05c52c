"""Helpers around the generation core: random sources and grid exports."""
