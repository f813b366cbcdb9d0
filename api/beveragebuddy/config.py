"""
Central configuration. Loads environment variables from the .env file
and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# Environment: "test", "local" or "prod"
ENV: str = os.getenv("ENV", "local")

# Database
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./beveragebuddy.db")

# Demo data is never seeded into the test database
SEED_DEMO_DATA: bool = os.getenv(
    "SEED_DEMO_DATA", "false" if ENV == "test" else "true"
).lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
