# ledger/serializers.py
"""
Serializers for ledger API.

Used for input validation and output formatting; writes happen in
ledger/commands.py.
"""

from rest_framework import serializers

from .models import LedgerEntry

DATE_INPUT_FORMATS = ["%m/%d/%Y", "iso-8601"]


class LedgerEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = LedgerEntry
        fields = [
            "id", "account_number", "account_name", "debit", "credit",
            "description", "eft_number", "ap_number", "type", "reference",
            "date", "cheque_date", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "account_name": {"required": False},
            "date": {"input_formats": DATE_INPUT_FORMATS},
            "cheque_date": {"input_formats": DATE_INPUT_FORMATS},
        }

    def validate(self, attrs):
        debit = attrs.get("debit", getattr(self.instance, "debit", 0)) or 0
        credit = attrs.get("credit", getattr(self.instance, "credit", 0)) or 0
        if debit < 0 or credit < 0:
            raise serializers.ValidationError("Amounts cannot be negative.")
        return attrs


class JournalLineSerializer(serializers.Serializer):
    account_number = serializers.CharField(max_length=10)
    account_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    debit = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=0)
    credit = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=0)


class JournalEntrySerializer(serializers.Serializer):
    date = serializers.DateField(input_formats=DATE_INPUT_FORMATS)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    lines = JournalLineSerializer(many=True)


class EFTTransferSerializer(serializers.Serializer):
    eft_number = serializers.CharField(max_length=20)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    description = serializers.CharField(max_length=500)
    cheque_date = serializers.DateField(input_formats=DATE_INPUT_FORMATS, required=False, allow_null=True)


class PeriodSerializer(serializers.Serializer):
    """fromDate/toDate query or body parameters, also accepted in snake_case."""
    fromDate = serializers.DateField(input_formats=DATE_INPUT_FORMATS, required=False)
    toDate = serializers.DateField(input_formats=DATE_INPUT_FORMATS, required=False)
    from_date = serializers.DateField(input_formats=DATE_INPUT_FORMATS, required=False)
    to_date = serializers.DateField(input_formats=DATE_INPUT_FORMATS, required=False)

    def validate(self, attrs):
        from_date = attrs.get("from_date") or attrs.get("fromDate")
        to_date = attrs.get("to_date") or attrs.get("toDate")
        if not from_date or not to_date:
            raise serializers.ValidationError("fromDate and toDate are required.")
        if from_date > to_date:
            raise serializers.ValidationError("fromDate must be on or before toDate.")
        return {"from_date": from_date, "to_date": to_date}


class ReconciliationSaveSerializer(PeriodSerializer):
    statement_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True)
    cleared_ledger_ids = serializers.ListField(child=serializers.IntegerField(), required=False)

    def validate(self, attrs):
        period = super().validate(attrs)
        period["statement_amount"] = attrs.get("statement_amount")
        period["cleared_ledger_ids"] = attrs.get("cleared_ledger_ids", [])
        return period


class ClearTransactionSerializer(PeriodSerializer):
    ledger_id = serializers.IntegerField()
    should_clear = serializers.BooleanField()

    def validate(self, attrs):
        period = super().validate(attrs)
        period["ledger_id"] = attrs["ledger_id"]
        period["should_clear"] = attrs["should_clear"]
        return period


class StatementAmountSerializer(PeriodSerializer):
    statement_amount = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)

    def validate(self, attrs):
        period = super().validate(attrs)
        period["statement_amount"] = attrs.get("statement_amount")
        return period
