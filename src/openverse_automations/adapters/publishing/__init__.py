"""Publishing adapters."""

from openverse_automations.adapters.publishing.make_site_publisher import MakeSitePublisher

__all__ = ["MakeSitePublisher"]
