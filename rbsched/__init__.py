"""Process scheduling simulation on a 2-3-4 tree with a red-black view."""

__version__ = "0.1.0"