"""Command-line interface for vltsync."""
