"""Application layer.

Wires configuration, the pooled database engine and the HTTP routes.
"""

from . import config

__all__ = ["config"]
