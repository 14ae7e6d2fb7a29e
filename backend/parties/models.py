# parties/models.py
"""
Counterparty records.

- Agent: brokerage salesperson, numbered from 100, with a default fee plan
- Vendor: payee for general account expenses
- Lawyer: solicitor on either end of a trade
- OutsideBroker: cooperating or listing brokerage on a trade
"""

from django.core.validators import MinValueValidator
from django.db import models

from trades.commissions import FEE_PLAN_CHOICES

AGENT_NUMBER_FLOOR = 100


class TradeEnd(models.TextChoices):
    LISTING = "Listing End", "Listing End"
    SELLING = "Selling End", "Selling End"


class YesNo(models.TextChoices):
    YES = "Yes", "Yes"
    NO = "No", "No"


class Agent(models.Model):
    employee_no = models.PositiveIntegerField(
        unique=True,
        validators=[MinValueValidator(AGENT_NUMBER_FLOOR)],
    )
    first_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100)
    legal_name = models.CharField(max_length=200, blank=True, default="")
    nickname = models.CharField(max_length=100, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=30, blank=True, default="")
    cell_phone = models.CharField(max_length=30, blank=True, default="")
    street_number = models.CharField(max_length=20, blank=True, default="")
    street_name = models.CharField(max_length=200, blank=True, default="")
    unit_number = models.CharField(max_length=20, blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    province = models.CharField(max_length=50, blank=True, default="")
    postal_code = models.CharField(max_length=20, blank=True, default="")
    hst_number = models.CharField(max_length=30, blank=True, default="")
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, default="Active")
    licenses = models.JSONField(default=list, blank=True)
    fee_plan = models.CharField(max_length=20, choices=FEE_PLAN_CHOICES, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["employee_no"]

    def __str__(self):
        return f"{self.employee_no} {self.full_name}"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Vendor(models.Model):
    vendor_number = models.PositiveIntegerField(unique=True)
    first_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100, blank=True, default="")
    company_name = models.CharField(max_length=200, blank=True, default="")
    street_number = models.CharField(max_length=20)
    street_name = models.CharField(max_length=200)
    unit = models.CharField(max_length=20, blank=True, default="")
    postal_code = models.CharField(max_length=20)
    city = models.CharField(max_length=100)
    province = models.CharField(max_length=50)
    phone_number = models.CharField(max_length=30)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["vendor_number"]

    def __str__(self):
        return f"{self.vendor_number} {self.display_name}"

    @property
    def display_name(self) -> str:
        return self.company_name or f"{self.first_name} {self.last_name}".strip()


class Lawyer(models.Model):
    class LawyerType(models.TextChoices):
        TENANT = "Tenant", "Tenant"
        LANDLORD = "Landlord", "Landlord"
        SELLER = "Seller", "Seller"
        BUYER = "Buyer", "Buyer"
        SELLER_LAWYER = "Seller Lawyer", "Seller Lawyer"
        BUYER_LAWYER = "Buyer Lawyer", "Buyer Lawyer"

    type = models.CharField(max_length=20, choices=LawyerType.choices)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    company_name = models.CharField(max_length=200, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    end = models.CharField(max_length=20, choices=TradeEnd.choices)
    primary_phone = models.CharField(max_length=30, blank=True, default="")
    cell_phone = models.CharField(max_length=30, blank=True, default="")
    address = models.CharField(max_length=300, blank=True, default="")
    trade_number = models.PositiveIntegerField(null=True, blank=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["last_name", "first_name"]

    def __str__(self):
        return f"{self.first_name} {self.last_name} ({self.type})"


class OutsideBroker(models.Model):
    class BrokerType(models.TextChoices):
        LISTING = "Listing Broker", "Listing Broker"
        COOPERATING = "Cooperating Broker", "Cooperating Broker"

    type = models.CharField(max_length=20, choices=BrokerType.choices)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    company = models.CharField(max_length=200, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    pay_broker = models.CharField(max_length=3, choices=YesNo.choices, default=YesNo.NO)
    end = models.CharField(max_length=20, choices=TradeEnd.choices)
    primary_phone = models.CharField(max_length=30, blank=True, default="")
    charged_hst = models.CharField(max_length=3, choices=YesNo.choices, default=YesNo.YES)
    address = models.CharField(max_length=300, blank=True, default="")
    trade_number = models.PositiveIntegerField(null=True, blank=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["company", "last_name"]

    def __str__(self):
        return f"{self.first_name} {self.last_name} - {self.company}"
