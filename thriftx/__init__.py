"""thriftX - clothing swap marketplace."""

__version__ = "0.1.0"
