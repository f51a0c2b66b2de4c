"""
CMS – Django Settings
=====================
Django provides the settings container, the gettext catalog used for
API error messages, and the ORM behind the site inventory.
The API dispatch layer itself does not depend on a request cycle.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("CMS_SECRET_KEY", "cms-dev-key-replace-before-deployment")

DEBUG = os.environ.get("CMS_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "cms.sites",
]

MIDDLEWARE = []

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
LOCALE_PATHS = [BASE_DIR / "locale"]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "cms": {
            "handlers": ["console"],
            "level": os.environ.get("CMS_LOG_LEVEL", "INFO"),
        },
    },
}

# ── CMS ───────────────────────────────────────────────────────
# Application version checked against theme version constraints.
CMS_VERSION = "1.0.0"

CMS_THEMES_DIR = Path(os.environ.get("CMS_THEMES_DIR", BASE_DIR / "themes"))

# Role of the acting identity for the settings-driven access gate.
CMS_API_ROLE = os.environ.get("CMS_API_ROLE", "global_admin")

CMS_API_ACL = {
    "roles": ["guest", "editor", "global_admin"],
    "allow": [
        ["guest", None, ["search", "read"]],
        ["editor", None, ["search", "read", "create", "batch_create", "update"]],
        ["global_admin", None, None],
    ],
    "deny": [],
}
