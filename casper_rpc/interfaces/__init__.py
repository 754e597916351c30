"""Protocol interfaces for the Casper RPC client."""
from .transport import Transport

__all__ = ["Transport"]
