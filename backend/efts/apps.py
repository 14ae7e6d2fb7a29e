# efts/apps.py
"""EFT app configuration."""

from django.apps import AppConfig


class EftsConfig(AppConfig):
    """Trust, commission trust, general account and plain EFT records."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "efts"
    verbose_name = "EFTs"
