"""Services package for EthIQ Board."""
