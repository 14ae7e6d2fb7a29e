# trades/admin.py
"""
Trades are created and finalized through the API so commission lines
are recomputed and finalize postings stay one-time; the admin is for
viewing.
"""

from django.contrib import admin

from ledger.admin import ReadOnlyInline, ReadOnlyModelAdmin
from .models import AgentCommission, Trade


class AgentCommissionInline(ReadOnlyInline):
    model = AgentCommission
    extra = 0
    fields = [
        "position", "agent_name", "award_amount", "percentage", "fee_plan",
        "amount", "tax", "fees_deducted", "total_fees", "net_commission",
    ]
    readonly_fields = fields


@admin.register(Trade)
class TradeAdmin(ReadOnlyModelAdmin):
    list_display = ["trade_number", "address", "is_finalized", "fallen_thru", "updated_at"]
    list_filter = ["is_finalized", "fallen_thru"]
    search_fields = ["trade_number"]
    inlines = [AgentCommissionInline]
