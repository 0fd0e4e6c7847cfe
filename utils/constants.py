"""Constants for ReleaseGate.

This module defines shared constants used across the application.
"""

# Exit codes (matching CLI exit codes)
EXIT_SUCCESS = 0
EXIT_GATE_FAILED = 1
EXIT_INVALID_CONFIG = 1
EXIT_RUNTIME_ERROR = 1

# Application metadata
APP_NAME = "ReleaseGate"
APP_VERSION = "1.0.0"

# Directory names never descended into while scanning a project
EXCLUDED_DIRECTORIES = ("node_modules", ".next", ".git", "dist", "build")

# Default values
DEFAULT_PROJECT_PATH = "."
