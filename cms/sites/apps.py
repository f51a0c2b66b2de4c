"""
CMS Sites — App Configuration
===============================
Persisted sites. The theme bootstrap reads which themes sites use.
"""

from django.apps import AppConfig


class CmsSitesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cms.sites"
    label = "cms_sites"
    verbose_name = "CMS Sites"
