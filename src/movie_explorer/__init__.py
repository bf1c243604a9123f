"""Movie Explorer - movie search and favorites API."""

__version__ = "0.1.0"
