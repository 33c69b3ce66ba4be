"""App Registry: REST service over a JSON document of application records."""

__version__ = "1.0.0"
