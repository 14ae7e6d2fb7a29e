# efts/admin.py
from django.contrib import admin

from ledger.admin import ReadOnlyModelAdmin
from .models import CommissionTrustEFT, EFTRecord, GeneralAccountEFT, RealEstateTrustEFT


@admin.register(RealEstateTrustEFT)
class RealEstateTrustEFTAdmin(ReadOnlyModelAdmin):
    list_display = ["eft_number", "type", "trade", "amount", "recipient", "cheque_date"]
    list_filter = ["type"]
    search_fields = ["eft_number", "recipient"]


@admin.register(CommissionTrustEFT)
class CommissionTrustEFTAdmin(ReadOnlyModelAdmin):
    list_display = ["eft_number", "type", "trade", "agent_name", "amount", "recipient", "cheque_date"]
    list_filter = ["type"]
    search_fields = ["eft_number", "recipient", "agent_name"]


@admin.register(GeneralAccountEFT)
class GeneralAccountEFTAdmin(ReadOnlyModelAdmin):
    list_display = ["eft_number", "type", "vendor", "amount", "hst", "expense_category", "eft_created"]
    list_filter = ["type", "expense_category", "eft_created"]
    search_fields = ["eft_number", "recipient", "invoice_number"]


@admin.register(EFTRecord)
class EFTRecordAdmin(ReadOnlyModelAdmin):
    list_display = ["eft_number", "trade", "amount", "recipient", "date"]
    search_fields = ["eft_number", "recipient"]
