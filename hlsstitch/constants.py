"""Constants used through the app."""

import os
from pathlib import Path

# Directories
_env_instance_dir = os.getenv("INSTANCE_DIR")
INSTANCE_DIR = Path(_env_instance_dir) if _env_instance_dir else Path(__file__).parent.parent / "instance"
SETTINGS_FILE = INSTANCE_DIR / "config.json"

# API
API_V1_STR = "/api/v1"

# Config
ENV_PREFIX = "HLSSTITCH_"
TESTING_ENV_VAR = "HLSSTITCH_TESTING"
