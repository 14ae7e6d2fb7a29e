# parties/serializers.py
"""
Serializers for counterparty records.

The same serializer validates input and formats output; writes go
through parties/commands.py with ``validated_data``.
"""

from rest_framework import serializers

from .models import Agent, Lawyer, OutsideBroker, Vendor


class AgentSerializer(serializers.ModelSerializer):
    employee_no = serializers.IntegerField(required=False, min_value=100)
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Agent
        fields = [
            "id", "employee_no", "first_name", "middle_name", "last_name",
            "legal_name", "nickname", "full_name", "email", "phone", "cell_phone",
            "street_number", "street_name", "unit_number", "city", "province",
            "postal_code", "hst_number", "start_date", "end_date", "status",
            "licenses", "fee_plan", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_employee_no(self, value):
        qs = Agent.objects.filter(employee_no=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Employee number is already in use.")
        return value


class VendorSerializer(serializers.ModelSerializer):
    vendor_number = serializers.IntegerField(required=False, min_value=1)
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = Vendor
        fields = [
            "id", "vendor_number", "first_name", "last_name", "company_name",
            "display_name", "street_number", "street_name", "unit",
            "postal_code", "city", "province", "phone_number",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_vendor_number(self, value):
        qs = Vendor.objects.filter(vendor_number=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Vendor number is already in use.")
        return value


class LawyerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lawyer
        fields = [
            "id", "type", "first_name", "last_name", "company_name", "email",
            "end", "primary_phone", "cell_phone", "address", "trade_number",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class OutsideBrokerSerializer(serializers.ModelSerializer):
    class Meta:
        model = OutsideBroker
        fields = [
            "id", "type", "first_name", "last_name", "company", "email",
            "pay_broker", "end", "primary_phone", "charged_hst", "address",
            "trade_number", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
