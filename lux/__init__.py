"""Find the downloadable media streams behind web pages."""

__version__ = "0.1.0"