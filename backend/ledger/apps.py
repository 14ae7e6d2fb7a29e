# ledger/apps.py
"""Ledger app configuration."""

from django.apps import AppConfig


class LedgerConfig(AppConfig):
    """General ledger, sequence counters and bank reconciliation."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "ledger"
    verbose_name = "General Ledger"
