"""Web adapters for the live park roster."""

from dogpark_live.adapters.web.app import DogParkWebAdapter
from dogpark_live.adapters.web.context import WebContext

__all__ = ["DogParkWebAdapter", "WebContext"]
