"""Host-side helpers for Linux VM instances: directories, SSH options, host network settings."""

__version__ = "0.1.0"