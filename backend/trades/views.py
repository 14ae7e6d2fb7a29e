# trades/views.py
"""
Thin views over the trades command layer.

Finalize endpoints are keyed by trade number; CRUD endpoints by id.
"""

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.authz import resolve_actor
from .commands import (
    create_trade,
    delete_trade,
    finalize_trade,
    next_trade_number,
    preview_finalize,
    update_trade,
)
from .commissions import calculate_agent_commission
from .models import Trade
from .serializers import (
    CommissionCalculateSerializer,
    FinalizeSerializer,
    TradeSerializer,
    TradeWithEftsSerializer,
    TradeWriteSerializer,
)


def _failure(result):
    return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)


def _trades():
    return Trade.objects.prefetch_related("agent_commissions")


class TradeListCreateView(APIView):
    """
    GET  /api/trades/  -> newest trade number first
    POST /api/trades/  -> create, recomputing agent commission lines
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        return Response(TradeSerializer(_trades(), many=True).data)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = TradeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_trade(actor, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return Response(TradeSerializer(result.data).data, status=status.HTTP_201_CREATED)


class TradeDetailView(APIView):
    """
    GET        -> retrieve
    PUT/PATCH  -> update, recomputing agent commission lines when given
    DELETE     -> delete (blocked while EFT records reference the trade)
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        resolve_actor(request)
        trade = get_object_or_404(_trades(), pk=pk)
        return Response(TradeSerializer(trade).data)

    def _update(self, request, pk, partial):
        actor = resolve_actor(request)
        get_object_or_404(Trade, pk=pk)
        serializer = TradeWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        result = update_trade(actor, pk, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        trade = _trades().get(pk=result.data.pk)
        return Response(TradeSerializer(trade).data)

    def put(self, request, pk):
        return self._update(request, pk, partial=False)

    def patch(self, request, pk):
        return self._update(request, pk, partial=True)

    def delete(self, request, pk):
        actor = resolve_actor(request)
        get_object_or_404(Trade, pk=pk)
        result = delete_trade(actor, pk)
        if not result.success:
            return _failure(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class NextTradeNumberView(APIView):
    """GET /api/trades/next-number/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        return Response({"next_trade_number": next_trade_number()})


class TradeWithEftsView(APIView):
    """GET /api/trades/<pk>/with-efts/ -> trade plus its EFT records"""
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        resolve_actor(request)
        trade = get_object_or_404(
            _trades().prefetch_related(
                "real_estate_trust_efts", "commission_trust_efts", "eft_records",
            ),
            pk=pk,
        )
        return Response(TradeWithEftsSerializer(trade).data)


class CommissionCalculateView(APIView):
    """POST /api/trades/commission/calculate/ -> breakdown, nothing stored"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        resolve_actor(request)
        serializer = CommissionCalculateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        breakdown = calculate_agent_commission(**serializer.validated_data)
        return Response(breakdown.as_dict())


class FinalizePreviewView(APIView):
    """
    POST /api/trades/<trade_number>/finalize/preview/

    The rows finalize would post, whether a commission receipt is needed
    and its default amount. Writes nothing.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, trade_number):
        resolve_actor(request)
        trade = get_object_or_404(_trades(), trade_number=trade_number)
        serializer = FinalizeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if not data.get("finalized_date"):
            return Response(
                {"detail": "Finalized date is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(preview_finalize(
            trade,
            finalized_date=data["finalized_date"],
            closing_date=data.get("closing_date"),
            end=data["end"],
            received_from=data["received_from"],
            payment_amount=data.get("payment_amount"),
        ))


class FinalizeTradeView(APIView):
    """POST /api/trades/<trade_number>/finalize/"""
    permission_classes = [IsAuthenticated]

    def post(self, request, trade_number):
        actor = resolve_actor(request)
        get_object_or_404(Trade, trade_number=trade_number)
        serializer = FinalizeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = finalize_trade(actor, trade_number, **serializer.validated_data)
        if not result.success:
            return _failure(result)

        eft = result.data["eft"]
        return Response({
            "trade": TradeSerializer(result.data["trade"]).data,
            "ledger_rows": len(result.data["entries"]),
            "eft_number": eft.eft_number if eft else None,
        })
