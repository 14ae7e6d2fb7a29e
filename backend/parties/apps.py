# parties/apps.py
"""Parties app configuration."""

from django.apps import AppConfig


class PartiesConfig(AppConfig):
    """Agents, vendors, lawyers and outside brokers."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "parties"
    verbose_name = "Parties"
