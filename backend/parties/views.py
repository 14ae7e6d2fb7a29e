# parties/views.py
"""
Thin views over the parties command layer.

List/detail views share two base classes; each concrete view only names
its model, serializer and commands.
"""

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.authz import resolve_actor
from .commands import (
    create_agent,
    create_lawyer,
    create_outside_broker,
    create_vendor,
    delete_party,
    next_employee_no,
    next_vendor_number,
    update_agent,
    update_lawyer,
    update_outside_broker,
    update_vendor,
)
from .models import Agent, Lawyer, OutsideBroker, Vendor
from .serializers import (
    AgentSerializer,
    LawyerSerializer,
    OutsideBrokerSerializer,
    VendorSerializer,
)


def _failure(result):
    return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)


class PartyListCreateView(APIView):
    """
    GET  -> list records
    POST -> create a record through ``create_command``
    """
    permission_classes = [IsAuthenticated]
    model = None
    serializer_class = None
    create_command = None

    def get(self, request):
        resolve_actor(request)
        return Response(self.serializer_class(self.model.objects.all(), many=True).data)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.create_command(actor, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return Response(self.serializer_class(result.data).data, status=status.HTTP_201_CREATED)


class PartyDetailView(APIView):
    """
    GET        -> retrieve
    PUT/PATCH  -> update through ``update_command``
    DELETE     -> delete
    """
    permission_classes = [IsAuthenticated]
    model = None
    serializer_class = None
    update_command = None

    def get(self, request, pk):
        resolve_actor(request)
        instance = get_object_or_404(self.model, pk=pk)
        return Response(self.serializer_class(instance).data)

    def _update(self, request, pk, partial):
        actor = resolve_actor(request)
        instance = get_object_or_404(self.model, pk=pk)
        serializer = self.serializer_class(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        result = self.update_command(actor, instance, **serializer.validated_data)
        if not result.success:
            return _failure(result)
        return Response(self.serializer_class(result.data).data)

    def put(self, request, pk):
        return self._update(request, pk, partial=False)

    def patch(self, request, pk):
        return self._update(request, pk, partial=True)

    def delete(self, request, pk):
        actor = resolve_actor(request)
        instance = get_object_or_404(self.model, pk=pk)
        delete_party(actor, instance)
        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Agents
# =============================================================================

class AgentListCreateView(PartyListCreateView):
    model = Agent
    serializer_class = AgentSerializer
    create_command = staticmethod(create_agent)


class AgentDetailView(PartyDetailView):
    model = Agent
    serializer_class = AgentSerializer
    update_command = staticmethod(update_agent)


class NextEmployeeNoView(APIView):
    """GET /api/agents/next-employee-no/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        return Response({"next_employee_no": next_employee_no()})


class AgentByEmployeeNoView(APIView):
    """GET /api/agents/employee/<employee_no>/"""
    permission_classes = [IsAuthenticated]

    def get(self, request, employee_no):
        resolve_actor(request)
        agent = get_object_or_404(Agent, employee_no=employee_no)
        return Response(AgentSerializer(agent).data)


# =============================================================================
# Vendors
# =============================================================================

class VendorListCreateView(PartyListCreateView):
    model = Vendor
    serializer_class = VendorSerializer
    create_command = staticmethod(create_vendor)


class VendorDetailView(PartyDetailView):
    model = Vendor
    serializer_class = VendorSerializer
    update_command = staticmethod(update_vendor)


class NextVendorNoView(APIView):
    """GET /api/vendors/next-vendor-no/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resolve_actor(request)
        return Response({"next_vendor_no": next_vendor_number()})


class VendorByNumberView(APIView):
    """GET /api/vendors/number/<vendor_number>/"""
    permission_classes = [IsAuthenticated]

    def get(self, request, vendor_number):
        resolve_actor(request)
        vendor = get_object_or_404(Vendor, vendor_number=vendor_number)
        return Response(VendorSerializer(vendor).data)


class VendorWithEftsView(APIView):
    """GET /api/vendors/<pk>/with-efts/ -> vendor plus its general account EFTs"""
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        from efts.serializers import GeneralAccountEFTSerializer

        resolve_actor(request)
        vendor = get_object_or_404(Vendor, pk=pk)
        data = VendorSerializer(vendor).data
        data["general_account_efts"] = GeneralAccountEFTSerializer(
            vendor.general_account_efts.order_by("-eft_number"),
            many=True,
        ).data
        return Response(data)


# =============================================================================
# Lawyers & outside brokers
# =============================================================================

class LawyerListCreateView(PartyListCreateView):
    model = Lawyer
    serializer_class = LawyerSerializer
    create_command = staticmethod(create_lawyer)


class LawyerDetailView(PartyDetailView):
    model = Lawyer
    serializer_class = LawyerSerializer
    update_command = staticmethod(update_lawyer)


class OutsideBrokerListCreateView(PartyListCreateView):
    model = OutsideBroker
    serializer_class = OutsideBrokerSerializer
    create_command = staticmethod(create_outside_broker)


class OutsideBrokerDetailView(PartyDetailView):
    model = OutsideBroker
    serializer_class = OutsideBrokerSerializer
    update_command = staticmethod(update_outside_broker)
