"""Digest adapters."""

from openverse_automations.adapters.digest.html_generator import HTMLDigestGenerator

__all__ = ["HTMLDigestGenerator"]
