"""Flask configuration."""

import os


class Config:
    """Base configuration."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key-change-in-prod")

    SERVICE_NAME = "What If Simulator API"

    # CORS
    CORS_ALLOW_ORIGIN = os.environ.get("WHATIF_CORS_ORIGIN", "*")


class TestConfig(Config):
    """Testing configuration."""

    TESTING = True
