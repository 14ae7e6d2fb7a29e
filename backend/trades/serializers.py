# trades/serializers.py
"""
Serializers for trades.

Output: TradeSerializer (with agent commission lines) and
TradeWithEftsSerializer. Input: TradeWriteSerializer, the commission
calculator request and the finalize request. Stored commission figures
are never accepted from the client; trades/commands.py recomputes them.
"""

from rest_framework import serializers

from efts.serializers import CommissionTrustEFTSerializer, EFTRecordSerializer, RealEstateTrustEFTSerializer
from .commissions import FEE_PLAN_CHOICES
from .models import TRADE_NUMBER_FLOOR, AgentCommission, Trade
from .posting import LISTING_SIDE, SELLING_SIDE

DATE_INPUT_FORMATS = ["%m/%d/%Y", "iso-8601"]


class AgentCommissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = AgentCommission
        fields = [
            "id", "position", "agent", "agent_name", "classification", "lead",
            "award_amount", "percentage", "fee_plan",
            "buyer_rebate_included", "buyer_rebate_amount",
            "amount", "fees_deducted", "tax", "tax_on_fees", "total",
            "total_fees", "net_commission",
        ]
        read_only_fields = fields


class TradeSerializer(serializers.ModelSerializer):
    agent_commissions = AgentCommissionSerializer(many=True, read_only=True)
    address = serializers.CharField(read_only=True)

    class Meta:
        model = Trade
        fields = [
            "id", "trade_number", "address", "key_info", "people",
            "outside_brokers", "trust_records", "commission", "conditions",
            "agent_commissions", "is_finalized", "fallen_thru",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class TradeWithEftsSerializer(TradeSerializer):
    real_estate_trust_efts = RealEstateTrustEFTSerializer(many=True, read_only=True)
    commission_trust_efts = CommissionTrustEFTSerializer(many=True, read_only=True)
    eft_records = EFTRecordSerializer(many=True, read_only=True)

    class Meta(TradeSerializer.Meta):
        fields = TradeSerializer.Meta.fields + [
            "real_estate_trust_efts", "commission_trust_efts", "eft_records",
        ]
        read_only_fields = fields


# =============================================================================
# Input
# =============================================================================

class AgentCommissionInputSerializer(serializers.Serializer):
    agent_id = serializers.IntegerField(required=False, allow_null=True)
    agent_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    classification = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    lead = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    award_amount = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=0)
    percentage = serializers.DecimalField(max_digits=7, decimal_places=4, required=False, default=0)
    fee_plan = serializers.ChoiceField(choices=FEE_PLAN_CHOICES, required=False, allow_blank=True, default="")
    fees_deducted = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True)
    buyer_rebate_included = serializers.BooleanField(required=False, default=False)
    buyer_rebate_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True)


class TradeWriteSerializer(serializers.Serializer):
    trade_number = serializers.IntegerField(min_value=TRADE_NUMBER_FLOOR)
    key_info = serializers.DictField(required=False)
    people = serializers.ListField(child=serializers.DictField(), required=False)
    outside_brokers = serializers.ListField(child=serializers.DictField(), required=False)
    trust_records = serializers.ListField(child=serializers.DictField(), required=False)
    commission = serializers.DictField(required=False)
    conditions = serializers.ListField(child=serializers.DictField(), required=False)
    agent_commissions = AgentCommissionInputSerializer(many=True, required=False)
    fallen_thru = serializers.BooleanField(required=False)


class CommissionCalculateSerializer(serializers.Serializer):
    award_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=7, decimal_places=4)
    fee_plan = serializers.ChoiceField(choices=FEE_PLAN_CHOICES, required=False, allow_blank=True, default="")
    flexible_fee = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True)
    buyer_rebate = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True)


class FinalizeSerializer(serializers.Serializer):
    finalized_date = serializers.DateField(input_formats=DATE_INPUT_FORMATS, required=False, allow_null=True)
    closing_date = serializers.DateField(input_formats=DATE_INPUT_FORMATS, required=False, allow_null=True)
    end = serializers.ChoiceField(
        choices=[SELLING_SIDE, LISTING_SIDE], required=False, default=SELLING_SIDE)
    fallen_thru = serializers.BooleanField(required=False, default=False)
    received_from = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    payment_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True)
