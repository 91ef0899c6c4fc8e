"""EthIQ Board - company/advisor relationship management API."""

__version__ = "0.1.0"
