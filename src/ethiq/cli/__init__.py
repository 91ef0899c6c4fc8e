"""CLI command groups for EthIQ Board."""
