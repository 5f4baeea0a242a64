import os
from pathlib import Path


class Config:                                   # Settings for the API server
    SECRET_KEY = os.environ.get("SECRET_KEY", "mysecretkey")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///tasks.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_HANDLE_LONG_PASSWORDS = True   # pre-hash, bcrypt itself stops at 72 bytes

    TOKEN_MAX_AGE = int(os.environ.get("TOKEN_MAX_AGE", 30 * 24 * 3600))   # seconds, 30 days
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"   # in memory
    BCRYPT_LOG_ROUNDS = 4


# Settings for the dashboard client
API_BASE = os.environ.get("TASKS_API_BASE", "http://localhost:5000")
TOKEN_FILE = Path(os.environ.get("TASKS_TOKEN_FILE", "~/.task-manager/token")).expanduser()
