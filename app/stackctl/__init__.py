"""stackctl - idempotent GPU compute stack provisioning."""

__version__ = "0.1.0"
