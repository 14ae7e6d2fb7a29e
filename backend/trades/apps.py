# trades/apps.py
"""Trades app configuration."""

from django.apps import AppConfig


class TradesConfig(AppConfig):
    """Trades, agent commissions and finalize posting."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "trades"
    verbose_name = "Trades"
