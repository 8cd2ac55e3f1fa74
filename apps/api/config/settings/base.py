# PATH: apps/api/config/settings/base.py

from pathlib import Path
import os

# ==================================================
# BASE
# ==================================================

BASE_DIR = Path(__file__).resolve().parents[4]

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-secret-key")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = ["*"]

# ==================================================
# INSTALLED APPS
# ==================================================

INSTALLED_APPS = [
    # Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Common
    "apps.api.common",

    # Domain Apps (외부 협력자 소유 스냅샷)
    "apps.domains.students",
    "apps.domains.courses",
    "apps.domains.enrollment",
    "apps.domains.assignments",

    # Domain Apps (coursework core)
    "apps.domains.grading",
    "apps.domains.progress",
    "apps.domains.certificates",

    # REST
    "rest_framework",
]

# ==================================================
# MIDDLEWARE
# ==================================================

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# ==================================================
# URL / WSGI / ASGI
# ==================================================

ROOT_URLCONF = "apps.api.config.urls"

ASGI_APPLICATION = "apps.api.config.asgi.application"

# ==================================================
# TEMPLATES
# ==================================================

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# ==================================================
# DATABASE
# ==================================================

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME"),
        "USER": os.getenv("DB_USER"),
        "PASSWORD": os.getenv("DB_PASSWORD"),
        "HOST": os.getenv("DB_HOST"),
        "PORT": os.getenv("DB_PORT", "5432"),
    }
}

# ==================================================
# GLOBAL
# ==================================================

LANGUAGE_CODE = "ko-kr"
TIME_ZONE = "Asia/Seoul"

USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ==================================================
# DRF
# ==================================================

REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    # 도메인 오류(NotFound/Conflict/Validation/PreconditionFailed) → HTTP
    "EXCEPTION_HANDLER": "apps.api.common.exceptions.coursework_exception_handler",
}

# ==================================================
# COURSEWORK (성적 / 진행 / 인증서)
# ==================================================

# 코스 가중치 첫 조회 시 기본값 (합계 100)
COURSEWORK_DEFAULT_GRADE_WEIGHTS = {
    "assignment": int(os.getenv("COURSEWORK_WEIGHT_ASSIGNMENT", "40")),
    "activity": int(os.getenv("COURSEWORK_WEIGHT_ACTIVITY", "30")),
    "exam": int(os.getenv("COURSEWORK_WEIGHT_EXAM", "30")),
}

COURSEWORK_GRADEBOOK_DEFAULT_LIMIT = int(os.getenv("COURSEWORK_GRADEBOOK_DEFAULT_LIMIT", "10"))
COURSEWORK_GRADEBOOK_MAX_LIMIT = int(os.getenv("COURSEWORK_GRADEBOOK_MAX_LIMIT", "100"))

# ==================================================
# LOGGING
# ==================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "[{levelname}] {asctime} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "coursework": {
            "level": os.getenv("COURSEWORK_LOG_LEVEL", LOG_LEVEL),
        },
    },
}
