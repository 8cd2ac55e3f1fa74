# PATH: apps/api/config/settings/test.py
from .base import *

DEBUG = False
SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

COURSEWORK_DEFAULT_GRADE_WEIGHTS = {"assignment": 40, "activity": 30, "exam": 30}
COURSEWORK_GRADEBOOK_DEFAULT_LIMIT = 10
COURSEWORK_GRADEBOOK_MAX_LIMIT = 100

LOGGING["root"]["level"] = "WARNING"
