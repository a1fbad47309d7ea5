"""A top-down action game built on a small entity-component system."""

__version__ = "0.1.0"