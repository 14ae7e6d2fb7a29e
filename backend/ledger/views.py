# ledger/views.py
"""
Thin views over the ledger command layer and reports.

Endpoints under /api/ledger/ and /api/reconciliation/.
"""

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.authz import resolve_actor
from ledger import chart
from .commands import (
    clear_ledger,
    create_ledger_entry,
    delete_ledger_entry,
    post_journal_entry,
    record_eft_transfer,
    save_reconciliation_settings,
    set_statement_amount,
    set_transaction_cleared,
    update_ledger_entry,
)
from .exports import ExportFormat, ledger_export, trial_balance_export
from .models import LedgerEntry
from .reports import account_feed, ledger_rows, reconciliation_state, trial_balance
from .sequences import JOURNAL_ENTRY, peek
from .serializers import (
    ClearTransactionSerializer,
    EFTTransferSerializer,
    JournalEntrySerializer,
    LedgerEntrySerializer,
    PeriodSerializer,
    ReconciliationSaveSerializer,
    StatementAmountSerializer,
)


def _failure(result):
    return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)


def _optional_period(request):
    """from/to (or fromDate/toDate) query params; both or neither."""
    params = request.query_params
    raw = {
        "from_date": params.get("from") or params.get("fromDate") or params.get("from_date"),
        "to_date": params.get("to") or params.get("toDate") or params.get("to_date"),
    }
    if not raw["from_date"] and not raw["to_date"]:
        return None, None
    serializer = PeriodSerializer(data=raw)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data["from_date"], serializer.validated_data["to_date"]


def _export_format(request):
    value = request.query_params.get("format", "json")
    if value != "json" and value not in ExportFormat.CHOICES:
        return None
    return value


def _bad_format():
    return Response(
        {"detail": f"Invalid format. Must be one of: json, {', '.join(ExportFormat.CHOICES)}"},
        status=status.HTTP_400_BAD_REQUEST,
    )


# =============================================================================
# Ledger rows
# =============================================================================

class LedgerListCreateView(APIView):
    """
    GET    /api/ledger/?from=&to=&format=  -> rows, most recent first
    POST   /api/ledger/                    -> add one row by hand
    DELETE /api/ledger/                    -> clear every row (staff only)
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        export_format = _export_format(request)
        if export_format is None:
            return _bad_format()

        from_date, to_date = _optional_period(request)
        entries = ledger_rows(from_date, to_date)
        if export_format != "json":
            return ledger_export(entries, export_format)
        return Response(LedgerEntrySerializer(entries, many=True).data)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = LedgerEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_ledger_entry(actor, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return Response(LedgerEntrySerializer(result.data).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        actor = resolve_actor(request)
        result = clear_ledger(actor)
        return Response(result.data)


class LedgerDetailView(APIView):
    """
    GET        -> retrieve
    PUT/PATCH  -> update
    DELETE     -> delete
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        resolve_actor(request)
        entry = get_object_or_404(LedgerEntry, pk=pk)
        return Response(LedgerEntrySerializer(entry).data)

    def _update(self, request, pk, partial):
        actor = resolve_actor(request)
        entry = get_object_or_404(LedgerEntry, pk=pk)
        serializer = LedgerEntrySerializer(entry, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        result = update_ledger_entry(actor, pk, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return Response(LedgerEntrySerializer(result.data).data)

    def put(self, request, pk):
        return self._update(request, pk, partial=False)

    def patch(self, request, pk):
        return self._update(request, pk, partial=True)

    def delete(self, request, pk):
        actor = resolve_actor(request)
        get_object_or_404(LedgerEntry, pk=pk)
        result = delete_ledger_entry(actor, pk)
        if not result.success:
            return _failure(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AccountFeedView(APIView):
    """GET /api/ledger/account/<account_number>/?fromDate=&toDate="""
    permission_classes = [IsAuthenticated]

    def get(self, request, account_number):
        resolve_actor(request)
        serializer = PeriodSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        period = serializer.validated_data
        return Response(account_feed(account_number, period["from_date"], period["to_date"]))


class NextReferenceView(APIView):
    """GET /api/ledger/next-reference/ -> next JE reference, nothing consumed"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        return Response({"next_reference": JOURNAL_ENTRY.format(peek(JOURNAL_ENTRY))})


class JournalEntryView(APIView):
    """POST /api/ledger/journal-entries/ -> balanced manual entry under one JE reference"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        actor = resolve_actor(request)
        serializer = JournalEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = post_journal_entry(actor, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return Response(
            {
                "reference": result.data["reference"],
                "entries": LedgerEntrySerializer(result.data["entries"], many=True).data,
            },
            status=status.HTTP_201_CREATED,
        )


class EFTTransferView(APIView):
    """POST /api/ledger/eft-transfer/ -> 10004 Dr / 10002 Cr"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        actor = resolve_actor(request)
        serializer = EFTTransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = record_eft_transfer(actor, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return Response(LedgerEntrySerializer(result.data, many=True).data, status=status.HTTP_201_CREATED)


class TrialBalanceView(APIView):
    """
    GET /api/ledger/trial-balance/

    Query params:
        from, to: optional period (both or neither)
        format: json, xlsx, csv, txt (default: json)
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        export_format = _export_format(request)
        if export_format is None:
            return _bad_format()

        from_date, to_date = _optional_period(request)
        report = trial_balance(from_date, to_date)
        if export_format != "json":
            return trial_balance_export(report, export_format)
        return Response(report)


class ChartView(APIView):
    """GET /api/ledger/chart/ -> fixed chart of accounts"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        return Response([
            {"account_number": number, "account_name": name}
            for number, name in sorted(chart.CHART.items())
        ])


# =============================================================================
# Reconciliation
# =============================================================================

class ReconciliationView(APIView):
    """
    GET  /api/reconciliation/<account_number>/?fromDate=&toDate=
    POST /api/reconciliation/<account_number>/  -> replace settings for the period
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, account_number):
        resolve_actor(request)
        serializer = PeriodSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        period = serializer.validated_data
        return Response(reconciliation_state(account_number, period["from_date"], period["to_date"]))

    def post(self, request, account_number):
        actor = resolve_actor(request)
        serializer = ReconciliationSaveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = save_reconciliation_settings(actor, account_number, **data)
        if not result.success:
            return _failure(result)
        return Response(reconciliation_state(account_number, data["from_date"], data["to_date"]))


class ClearedTransactionView(APIView):
    """PUT /api/reconciliation/<account_number>/cleared-transactions/"""
    permission_classes = [IsAuthenticated]

    def put(self, request, account_number):
        actor = resolve_actor(request)
        serializer = ClearTransactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = set_transaction_cleared(actor, account_number, **data)
        if not result.success:
            return _failure(result)
        return Response(reconciliation_state(account_number, data["from_date"], data["to_date"]))


class StatementAmountView(APIView):
    """PUT /api/reconciliation/<account_number>/statement-amount/"""
    permission_classes = [IsAuthenticated]

    def put(self, request, account_number):
        actor = resolve_actor(request)
        serializer = StatementAmountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = set_statement_amount(actor, account_number, **data)
        if not result.success:
            return _failure(result)
        return Response(reconciliation_state(account_number, data["from_date"], data["to_date"]))
