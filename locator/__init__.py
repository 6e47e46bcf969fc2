from .page import LocatorPage

__all__ = ["LocatorPage"]
