# efts/serializers.py
"""
Serializers for EFT records.

Model serializers format output. The ``*CreateSerializer`` classes
validate input for the create commands in efts/commands.py.

Cheque and due dates accept ``MM/DD/YYYY`` as sent by the deal sheet
forms, or ISO dates.
"""

from rest_framework import serializers

from .models import CommissionTrustEFT, EFTRecord, GeneralAccountEFT, RealEstateTrustEFT

DATE_INPUT_FORMATS = ["%m/%d/%Y", "iso-8601"]


def form_date(**kwargs):
    return serializers.DateField(
        input_formats=DATE_INPUT_FORMATS,
        required=False,
        allow_null=True,
        **kwargs,
    )


EFT_FIELDS = [
    "id", "eft_number", "amount", "date", "cheque_date", "recipient",
    "description", "created_at", "updated_at",
]


class RealEstateTrustEFTSerializer(serializers.ModelSerializer):
    trade_number = serializers.IntegerField(source="trade.trade_number", read_only=True)

    class Meta:
        model = RealEstateTrustEFT
        fields = EFT_FIELDS + ["trade", "trade_number", "type"]
        read_only_fields = fields


class CommissionTrustEFTSerializer(serializers.ModelSerializer):
    trade_number = serializers.IntegerField(source="trade.trade_number", read_only=True)

    class Meta:
        model = CommissionTrustEFT
        fields = EFT_FIELDS + ["trade", "trade_number", "type", "agent", "agent_name"]
        read_only_fields = fields


class GeneralAccountEFTSerializer(serializers.ModelSerializer):
    vendor_name = serializers.CharField(source="vendor.display_name", read_only=True, default="")

    class Meta:
        model = GeneralAccountEFT
        fields = EFT_FIELDS + [
            "type", "vendor", "vendor_name", "hst", "due_date",
            "expense_category", "invoice_number", "eft_created",
        ]
        read_only_fields = fields


class EFTRecordSerializer(serializers.ModelSerializer):
    trade_number = serializers.IntegerField(source="trade.trade_number", read_only=True)

    class Meta:
        model = EFTRecord
        fields = EFT_FIELDS + ["trade", "trade_number"]
        read_only_fields = fields


# =============================================================================
# Input
# =============================================================================

class TradeEFTCreateSerializer(serializers.Serializer):
    """Input for trust and commission trust EFTs."""
    trade_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    recipient = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    cheque_date = form_date()


class TrustDepositCreateSerializer(serializers.Serializer):
    trade_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    received_from = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")


class AgentCommissionEFTCreateSerializer(TradeEFTCreateSerializer):
    agent_id = serializers.IntegerField(required=False, allow_null=True)
    agent_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")


class GeneralAccountEFTCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    recipient = serializers.CharField(max_length=200)
    vendor_id = serializers.IntegerField(required=False, allow_null=True)
    expense_category = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    invoice_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    hst = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True)
    due_date = form_date()
    cheque_date = form_date()


class GeneralAccountEFTUpdateSerializer(serializers.Serializer):
    eft_created = serializers.BooleanField(required=False)
    hst = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    cheque_date = form_date()


class EFTRecordCreateSerializer(serializers.Serializer):
    trade_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    recipient = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
