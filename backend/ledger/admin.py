# ledger/admin.py
"""
Django admin configuration for ledger models.

LedgerEntry and Sequence are command-owned; the admin only displays
them. Other apps reuse ReadOnlyModelAdmin for records that must be
created through their command layer.
"""

from django.contrib import admin

from .models import ClearedTransaction, LedgerEntry, ReconciliationSettings, Sequence


class ReadOnlyModelAdmin(admin.ModelAdmin):
    """
    Base admin class for records written only by commands.

    To modify these models, use the API (ledger/commands.py and the
    trade and EFT commands).
    """

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def changeform_view(self, request, object_id=None, form_url="", extra_context=None):
        extra_context = extra_context or {}
        extra_context["show_save"] = False
        extra_context["show_save_and_continue"] = False
        extra_context["show_save_and_add_another"] = False
        return super().changeform_view(request, object_id, form_url, extra_context)


class ReadOnlyInline(admin.TabularInline):
    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LedgerEntry)
class LedgerEntryAdmin(ReadOnlyModelAdmin):
    list_display = [
        "id", "date", "account_number", "account_name", "debit", "credit",
        "eft_number", "reference", "description",
    ]
    list_filter = ["account_number", "type"]
    search_fields = ["description", "eft_number", "reference"]
    date_hierarchy = "created_at"


@admin.register(Sequence)
class SequenceAdmin(ReadOnlyModelAdmin):
    list_display = ["name", "last_value", "updated_at"]


class ClearedTransactionInline(ReadOnlyInline):
    model = ClearedTransaction
    extra = 0
    fields = ["ledger_entry", "cleared_at", "cleared_by"]
    readonly_fields = fields


@admin.register(ReconciliationSettings)
class ReconciliationSettingsAdmin(ReadOnlyModelAdmin):
    list_display = ["account_number", "from_date", "to_date", "statement_amount", "updated_at"]
    list_filter = ["account_number"]
    inlines = [ClearedTransactionInline]
