import os


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./taskboard.db")
API_PREFIX = os.getenv("API_PREFIX", "/api")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
VERSION = "1.0.0"
