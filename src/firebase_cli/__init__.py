"""Firebase CLI: login and project provisioning."""

__version__ = "0.1.0"
