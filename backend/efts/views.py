# efts/views.py
"""
Thin views over the EFT command layer.

Create endpoints answer 201 with the allocated ``eft_number`` and the
stored record. Command failures map to 400; missing trades, vendors and
records to 404.
"""

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.authz import resolve_actor
from ledger.sequences import EFT, peek
from parties.models import Agent
from trades.models import Trade
from .commands import (
    create_commission_trust_eft,
    create_eft_record,
    create_eft_transfer,
    create_general_account_eft,
    create_real_estate_trust_eft,
    renumber_below_floor,
    reset_counter,
    update_general_account_eft,
)
from .models import CommissionTrustEFT, EFTRecord, GeneralAccountEFT, RealEstateTrustEFT
from .serializers import (
    AgentCommissionEFTCreateSerializer,
    CommissionTrustEFTSerializer,
    EFTRecordCreateSerializer,
    EFTRecordSerializer,
    GeneralAccountEFTCreateSerializer,
    GeneralAccountEFTSerializer,
    GeneralAccountEFTUpdateSerializer,
    RealEstateTrustEFTSerializer,
    TradeEFTCreateSerializer,
    TrustDepositCreateSerializer,
)


def _failure(result):
    return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)


def _created(eft, serializer_class):
    return Response(
        {"eft_number": eft.eft_number, "eft": serializer_class(eft).data},
        status=status.HTTP_201_CREATED,
    )


# =============================================================================
# Shared list / lookup views
# =============================================================================

class EFTListView(APIView):
    """GET -> every record in the family, newest number first."""
    permission_classes = [IsAuthenticated]
    model = None
    serializer_class = None

    def get_queryset(self, **kwargs):
        return self.model.objects.all()

    def get(self, request, **kwargs):
        resolve_actor(request)
        return Response(self.serializer_class(self.get_queryset(**kwargs), many=True).data)


class CheckExistingView(APIView):
    """
    GET /check-existing/<trade_id>/<type>/

    Reports whether a record of that type already exists for the trade,
    with the most recent one's details and the total count.
    """
    permission_classes = [IsAuthenticated]
    model = None

    def get(self, request, trade_id, eft_type):
        resolve_actor(request)
        qs = self.model.objects.filter(trade_id=trade_id, type=eft_type)
        count = qs.count()
        if not count:
            return Response({"exists": False, "count": 0})

        latest = qs.first()
        return Response({
            "exists": True,
            "count": count,
            "eft_number": latest.eft_number,
            "type": latest.type,
            "date": latest.date,
            "amount": latest.amount,
            "recipient": latest.recipient,
        })


class ResetCounterView(APIView):
    """POST -> next number becomes the family floor; 400 while numbers at or above it are in use. Staff only."""
    permission_classes = [IsAuthenticated]
    family = None

    def post(self, request):
        actor = resolve_actor(request)
        result = reset_counter(actor, self.family)
        if not result.success:
            return _failure(result)
        return Response(result.data)


class MigrateCounterView(APIView):
    """POST -> renumber records below the floor and sync the counter. Staff only."""
    permission_classes = [IsAuthenticated]
    family = None

    def post(self, request):
        actor = resolve_actor(request)
        result = renumber_below_floor(actor, self.family)
        if not result.success:
            return _failure(result)
        return Response(result.data)


# =============================================================================
# Real estate trust (1000+)
# =============================================================================

class RealEstateTrustEFTCreateView(APIView):
    permission_classes = [IsAuthenticated]
    eft_type = None

    def post(self, request):
        actor = resolve_actor(request)
        serializer = TradeEFTCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        trade = get_object_or_404(Trade, pk=data["trade_id"])
        result = create_real_estate_trust_eft(
            actor,
            trade,
            type=self.eft_type,
            amount=data["amount"],
            recipient=data["recipient"],
            description=data["description"],
            cheque_date=data.get("cheque_date"),
        )
        if not result.success:
            return _failure(result)
        return _created(result.data, RealEstateTrustEFTSerializer)


class TrustDepositCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        actor = resolve_actor(request)
        serializer = TrustDepositCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        trade = get_object_or_404(Trade, pk=data["trade_id"])
        result = create_real_estate_trust_eft(
            actor,
            trade,
            type=RealEstateTrustEFT.Type.TRUST_DEPOSIT,
            amount=data["amount"],
            recipient=data["received_from"],
            description=data["description"],
        )
        if not result.success:
            return _failure(result)
        return _created(result.data, RealEstateTrustEFTSerializer)


class RealEstateTrustEFTListView(EFTListView):
    model = RealEstateTrustEFT
    serializer_class = RealEstateTrustEFTSerializer

    def get_queryset(self, **kwargs):
        return RealEstateTrustEFT.objects.select_related("trade")


class RealEstateTrustEFTByTradeView(RealEstateTrustEFTListView):
    def get_queryset(self, trade_id):
        return super().get_queryset().filter(trade_id=trade_id)


# =============================================================================
# Commission trust (2000+)
# =============================================================================

class CommissionTrustEFTCreateView(APIView):
    permission_classes = [IsAuthenticated]
    eft_type = None

    def post(self, request):
        actor = resolve_actor(request)
        serializer = AgentCommissionEFTCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        trade = get_object_or_404(Trade, pk=data["trade_id"])
        agent = None
        if data.get("agent_id"):
            agent = get_object_or_404(Agent, pk=data["agent_id"])

        result = create_commission_trust_eft(
            actor,
            trade,
            type=self.eft_type,
            amount=data["amount"],
            recipient=data["recipient"],
            description=data["description"],
            cheque_date=data.get("cheque_date"),
            agent=agent,
            agent_name=data["agent_name"],
        )
        if not result.success:
            return _failure(result)
        return _created(result.data, CommissionTrustEFTSerializer)


class CommissionTrustEFTListView(EFTListView):
    model = CommissionTrustEFT
    serializer_class = CommissionTrustEFTSerializer

    def get_queryset(self, **kwargs):
        return CommissionTrustEFT.objects.select_related("trade")


class CommissionTrustEFTByTradeView(CommissionTrustEFTListView):
    def get_queryset(self, trade_id):
        return super().get_queryset().filter(trade_id=trade_id)


class CommissionTrustEFTByAgentView(CommissionTrustEFTListView):
    def get_queryset(self, agent_id):
        return super().get_queryset().filter(agent_id=agent_id)


# =============================================================================
# General account (3000+)
# =============================================================================

class GeneralAccountEFTCreateView(APIView):
    permission_classes = [IsAuthenticated]
    eft_type = None

    def post(self, request):
        actor = resolve_actor(request)
        serializer = GeneralAccountEFTCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_general_account_eft(actor, type=self.eft_type, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return _created(result.data, GeneralAccountEFTSerializer)


class GeneralAccountEFTListView(EFTListView):
    model = GeneralAccountEFT
    serializer_class = GeneralAccountEFTSerializer

    def get_queryset(self, **kwargs):
        return GeneralAccountEFT.objects.select_related("vendor")


class GeneralAccountEFTByVendorView(GeneralAccountEFTListView):
    def get_queryset(self, vendor_id):
        return super().get_queryset().filter(vendor_id=vendor_id)


class GeneralAccountEFTByCategoryView(GeneralAccountEFTListView):
    def get_queryset(self, category):
        return super().get_queryset().filter(expense_category=category)


class GeneralAccountEFTDetailView(APIView):
    """
    GET        -> retrieve
    PUT/PATCH  -> update eft_created, hst or cheque_date
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        resolve_actor(request)
        eft = get_object_or_404(GeneralAccountEFT.objects.select_related("vendor"), pk=pk)
        return Response(GeneralAccountEFTSerializer(eft).data)

    def patch(self, request, pk):
        actor = resolve_actor(request)
        get_object_or_404(GeneralAccountEFT, pk=pk)
        serializer = GeneralAccountEFTUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = update_general_account_eft(actor, pk, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return Response(GeneralAccountEFTSerializer(result.data).data)

    put = patch


class CheckInvoiceView(APIView):
    """GET /general-account-eft/check-invoice/<invoice_number>/"""
    permission_classes = [IsAuthenticated]

    def get(self, request, invoice_number):
        resolve_actor(request)
        existing = GeneralAccountEFT.objects.filter(invoice_number=invoice_number).first()
        if existing is None:
            return Response({"exists": False})
        return Response({"exists": True, "eft_number": existing.eft_number})


# =============================================================================
# Plain EFTs (4000+)
# =============================================================================

class NextEFTNumberView(APIView):
    """GET /api/eft/next-number/ -> next plain EFT number, nothing consumed"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        return Response({"eft_number": peek(EFT)})


class EFTRecordListCreateView(APIView):
    """
    GET  -> plain EFT records
    POST -> allocate a number for a trade (no ledger rows)
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        qs = EFTRecord.objects.select_related("trade")
        return Response(EFTRecordSerializer(qs, many=True).data)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = EFTRecordCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        trade = get_object_or_404(Trade, pk=data["trade_id"])
        result = create_eft_record(actor, trade, amount=data["amount"], recipient=data["recipient"])
        if not result.success:
            return _failure(result)
        return _created(result.data, EFTRecordSerializer)


class EFTTransferView(APIView):
    """POST /api/eft/transfer/ -> plain EFT plus 10004 Dr / 10002 Cr"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        actor = resolve_actor(request)
        serializer = EFTRecordCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        trade = get_object_or_404(Trade, pk=data["trade_id"])
        result = create_eft_transfer(actor, trade, amount=data["amount"], recipient=data["recipient"])
        if not result.success:
            return _failure(result)
        return _created(result.data["eft"], EFTRecordSerializer)
