"""Execution environment detection."""

from __future__ import annotations

import os

from firebase_cli.config.constants import CLOUD_ENVIRONMENT_VARS


def is_cloud_environment() -> bool:
    """True inside a managed cloud shell or workspace (no localhost redirect)."""
    return any(os.environ.get(name) for name in CLOUD_ENVIRONMENT_VARS)
