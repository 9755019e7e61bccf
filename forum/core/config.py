# forum/core/config.py

import os
from datetime import timedelta


class Config:
    """Settings shared by every environment. Values come from the environment (.env is loaded in create_app)."""
    # Signs the access tokens issued on register/login.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv('JWT_ACCESS_TOKEN_HOURS', 168)))

    # 'firestore' or 'memory'
    FORUM_STORE = os.getenv('FORUM_STORE', 'firestore')
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')
    # Deadline handed to every store call; a timeout surfaces as STORE_UNAVAILABLE.
    STORE_TIMEOUT_SECONDS = float(os.getenv('STORE_TIMEOUT_SECONDS', 10))

    DEFAULT_PAGE_SIZE = int(os.getenv('DEFAULT_PAGE_SIZE', 10))
    MAX_PAGE_SIZE = int(os.getenv('MAX_PAGE_SIZE', 100))

    PASSWORD_RESET_TTL_MINUTES = int(os.getenv('PASSWORD_RESET_TTL_MINUTES', 60))


class DevelopmentConfig(Config):
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH', Config.FIREBASE_CREDENTIALS_PATH)


class TestingConfig(Config):
    """Runs entirely on the in-memory store, no Firebase credentials needed."""
    TESTING = True
    DEBUG = False
    FORUM_STORE = 'memory'
    JWT_SECRET_KEY = 'testing-secret-key-with-enough-length'
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 50


class ProductionConfig(Config):
    DEBUG = False


# create_app picks the class matching FLASK_ENV.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
