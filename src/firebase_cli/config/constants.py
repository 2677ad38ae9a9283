"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import os

import platformdirs

APP_NAME = "firebase-cli"
APP_AUTHOR = "firebase"

# Environment variable names
ENV_CONFIG_PATH = "FIREBASE_CONFIG_PATH"
ENV_FIREBASE_API_URL = "FIREBASE_API_URL"
ENV_RESOURCE_MANAGER_URL = "FIREBASE_CLOUDRESOURCEMANAGER_URL"
ENV_CLIENT_ID = "FIREBASE_CLIENT_ID"
ENV_CLIENT_SECRET = "FIREBASE_CLIENT_SECRET"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "configstore.toml"

# API origins and versions
FIREBASE_API_ORIGIN = os.environ.get(ENV_FIREBASE_API_URL, "https://firebase.googleapis.com")
RESOURCE_MANAGER_ORIGIN = os.environ.get(
    ENV_RESOURCE_MANAGER_URL, "https://cloudresourcemanager.googleapis.com",
)
FIREBASE_API_VERSION = "v1beta1"
FIREBASE_V1_API_VERSION = "v1"
RESOURCE_MANAGER_API_VERSION = "v1"
CONSOLE_ORIGIN = "https://console.firebase.google.com"

# Request timeouts (seconds)
DEFAULT_TIMEOUT = 30.0
CREATE_PROJECT_TIMEOUT = 15.0
CHECK_PROJECT_ID_TIMEOUT = 15.0

# Listing and prompting
MAXIMUM_PROMPT_LIST = 100
PROJECT_LIST_PAGE_SIZE = 1000
MAX_LIST_PAGES = 1000
SCROLL_HINT_THRESHOLD = 25

# Project ID / display name policy
PROJECT_ID_MIN_LENGTH = 6
PROJECT_ID_MAX_LENGTH = 30
DISPLAY_NAME_MIN_LENGTH = 4
DISPLAY_NAME_MAX_LENGTH = 30

# Long-running operations
OPERATION_POLL_INTERVAL = 1.0
OPERATION_TIMEOUT = 300.0

# OAuth client of the installed application
OAUTH_CLIENT_ID = os.environ.get(
    ENV_CLIENT_ID,
    "563584335869-fgrhgmd47bqnekij5i8b5pr03ho849e6.apps.googleusercontent.com",
)
OAUTH_CLIENT_SECRET = os.environ.get(ENV_CLIENT_SECRET, "j9iVZfS8kkCEFUPaAeJV0sAi")
OAUTH_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
OAUTH_TOKEN_URI = "https://oauth2.googleapis.com/token"
OAUTH_SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/cloudplatformprojects.readonly",
    "https://www.googleapis.com/auth/firebase",
    "https://www.googleapis.com/auth/cloud-platform",
]
# Manual flow: the browser lands on an unreachable page whose URL carries the code.
OOB_REDIRECT_URI = "http://localhost:1"

# Managed cloud workspaces where a localhost redirect cannot reach the CLI
CLOUD_ENVIRONMENT_VARS = (
    "CODESPACES",
    "GOOGLE_CLOUD_WORKSTATIONS",
    "MONOSPACE_ENV",
    "CLOUD_SHELL",
)
