"""
CMS Sites — Site Model
========================
A public site and the theme it is rendered with.
"""

from __future__ import annotations

from django.db import models


class Site(models.Model):
    slug = models.SlugField(max_length=190, unique=True)
    title = models.CharField(max_length=255)
    theme = models.CharField(max_length=190)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "cms_sites"
        ordering = ["slug"]
        indexes = [
            models.Index(fields=["theme"], name="idx_site_theme"),
        ]

    def __str__(self) -> str:
        return f"{self.slug} ({self.theme})"
