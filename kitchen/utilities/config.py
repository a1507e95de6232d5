"""Configuration management for The Kitchen application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'

# Database
DATABASE_URL: Final[str] = os.getenv('DATABASE_URL', f"sqlite:///{(DATA_DIR / 'kitchen.db').as_posix()}")
SQL_ECHO: Final[bool] = os.getenv('SQL_ECHO', 'False').lower() == 'true'

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Used when the request layer does not identify the acting user
DEFAULT_USER_ID: Final[str] = os.getenv('DEFAULT_USER_ID', 'demo-user')

# Domain tuning
MIN_SETUP_INGREDIENTS: Final[int] = int(os.getenv('MIN_SETUP_INGREDIENTS', '3'))
FEATURED_LIMIT: Final[int] = int(os.getenv('FEATURED_LIMIT', '6'))
DAYS_BEFORE_EXPIRY: Final[int] = int(os.getenv('DAYS_BEFORE_EXPIRY', '5'))
