"""
Environment configuration and logging setup.

Values come from the process environment, optionally seeded from a .env
file in the working directory.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .data.models import UnitPreference

load_dotenv()

# Storage key the unit preference is saved under
UNIT_PREFERENCE_KEY = "unitPreference"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    db_dir: str = "data"
    unit_preference: UnitPreference = UnitPreference.ORIGINAL
    debug: bool = False


def get_settings() -> Settings:
    """Read settings from the environment."""
    return Settings(
        db_dir=os.getenv("GROCERY_DB_DIR", "data"),
        unit_preference=UnitPreference.resolve(os.getenv("GROCERY_UNIT_PREFERENCE")),
        debug=os.getenv("DEBUG", "false").lower() == "true",
    )


def setup_logging(debug: Optional[bool] = None):
    """Configure root logging. DEBUG=true in the environment turns on debug output."""
    if debug is None:
        debug = get_settings().debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )
