"""vltsync - Provision local directories as VLT sync roots."""

__version__ = "0.1.0"
