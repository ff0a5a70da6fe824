"""Bundled data files for vltsync."""
