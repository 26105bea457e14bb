"""Repository maintenance automations for Openverse."""

__version__ = "0.1.0"
