"""Views subsystem — View protocol, ViewManager, and built-in views."""

from whistlybird.views.base import Panel, View, ViewAction, ViewContext, ViewManager

__all__ = ["Panel", "View", "ViewAction", "ViewContext", "ViewManager"]
