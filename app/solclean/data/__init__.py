"""Bundled data files for solclean."""
