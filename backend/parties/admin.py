# parties/admin.py
from django.contrib import admin

from .models import Agent, Lawyer, OutsideBroker, Vendor


@admin.register(Agent)
class AgentAdmin(admin.ModelAdmin):
    list_display = ["employee_no", "first_name", "last_name", "email", "fee_plan", "status"]
    list_filter = ["fee_plan", "status"]
    search_fields = ["employee_no", "first_name", "last_name", "email"]


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ["vendor_number", "company_name", "first_name", "last_name", "phone_number"]
    search_fields = ["vendor_number", "company_name", "last_name"]


@admin.register(Lawyer)
class LawyerAdmin(admin.ModelAdmin):
    list_display = ["last_name", "first_name", "company_name", "type", "end", "trade_number"]
    list_filter = ["type"]


@admin.register(OutsideBroker)
class OutsideBrokerAdmin(admin.ModelAdmin):
    list_display = ["company", "first_name", "last_name", "type", "end", "trade_number"]
    list_filter = ["type"]
