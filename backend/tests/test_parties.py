# tests/test_parties.py
"""
Tests for counterparty records (agents, vendors, lawyers, outside brokers).
"""

import pytest

from parties.commands import create_agent, create_vendor, next_employee_no, next_vendor_number, update_agent
from parties.models import Agent, Lawyer, OutsideBroker


VENDOR_ADDRESS = {
    "street_number": "9",
    "street_name": "Queen St",
    "postal_code": "M5C 2Z4",
    "city": "Toronto",
    "province": "ON",
    "phone_number": "416-555-0199",
}


# =============================================================================
# Commands
# =============================================================================

@pytest.mark.django_db
class TestNumbering:

    def test_first_employee_number_is_100(self):
        assert next_employee_no() == 100

    def test_employee_number_follows_highest(self, agent, second_agent):
        assert next_employee_no() == 103

    def test_create_agent_assigns_number(self, actor, agent):
        result = create_agent(actor, first_name="Lee", last_name="Chan")

        assert result.success
        assert result.data.employee_no == 102

    def test_employee_number_floor(self, actor):
        result = create_agent(actor, employee_no=42, first_name="Lee", last_name="Chan")

        assert not result.success
        assert not Agent.objects.exists()

    def test_duplicate_employee_number(self, actor, agent, second_agent):
        result = update_agent(actor, second_agent, employee_no=agent.employee_no)

        assert not result.success
        assert result.error == "Agent number is already in use."

    def test_vendor_numbers(self, actor, vendor):
        assert next_vendor_number() == 2

        result = create_vendor(actor, company_name="Paint Co", **VENDOR_ADDRESS)
        assert result.data.vendor_number == 2


# =============================================================================
# API
# =============================================================================

@pytest.mark.django_db
class TestAgentAPI:

    def test_create_without_number(self, api_client):
        response = api_client.post("/api/agents/", {
            "first_name": "Lee",
            "last_name": "Chan",
            "fee_plan": "plan8515",
        }, format="json")

        assert response.status_code == 201
        assert response.json()["employee_no"] == 100
        assert response.json()["full_name"] == "Lee Chan"

    def test_duplicate_number_is_400(self, api_client, agent):
        response = api_client.post("/api/agents/", {
            "employee_no": agent.employee_no,
            "first_name": "Lee",
            "last_name": "Chan",
        }, format="json")

        assert response.status_code == 400
        assert "employee_no" in response.json()

    def test_next_employee_no(self, api_client, agent):
        response = api_client.get("/api/agents/next-employee-no/")
        assert response.json() == {"next_employee_no": 102}

    def test_lookup_by_employee_no(self, api_client, agent):
        response = api_client.get("/api/agents/employee/101/")

        assert response.status_code == 200
        assert response.json()["id"] == agent.id
        assert api_client.get("/api/agents/employee/999/").status_code == 404

    def test_update_keeps_own_number(self, api_client, agent):
        response = api_client.patch(f"/api/agents/{agent.pk}/", {
            "employee_no": 101,
            "nickname": "DR",
        }, format="json")

        assert response.status_code == 200
        assert response.json()["nickname"] == "DR"

    def test_list_and_delete(self, api_client, agent, second_agent):
        listing = api_client.get("/api/agents/").json()
        assert [a["employee_no"] for a in listing] == [101, 102]

        assert api_client.delete(f"/api/agents/{agent.pk}/").status_code == 204
        assert not Agent.objects.filter(pk=agent.pk).exists()


@pytest.mark.django_db
class TestVendorAPI:

    def test_create_and_lookup(self, api_client, vendor):
        response = api_client.post("/api/vendors/", {"company_name": "Paint Co", **VENDOR_ADDRESS}, format="json")

        assert response.status_code == 201
        assert response.json()["vendor_number"] == 2
        assert response.json()["display_name"] == "Paint Co"

        found = api_client.get("/api/vendors/number/2/").json()
        assert found["company_name"] == "Paint Co"

    def test_next_vendor_no(self, api_client):
        response = api_client.get("/api/vendors/next-vendor-no/")
        assert response.json() == {"next_vendor_no": 1}

    def test_duplicate_number_is_400(self, api_client, vendor):
        response = api_client.post("/api/vendors/", {
            "vendor_number": 1, "company_name": "Paint Co", **VENDOR_ADDRESS,
        }, format="json")
        assert response.status_code == 400

    def test_missing_address_is_400(self, api_client):
        response = api_client.post("/api/vendors/", {"company_name": "Paint Co"}, format="json")
        assert response.status_code == 400


@pytest.mark.django_db
class TestLawyerAndBrokerAPI:

    def test_lawyer_crud(self, api_client):
        response = api_client.post("/api/lawyers/", {
            "type": "Buyer Lawyer",
            "first_name": "Ruth",
            "last_name": "Adler",
            "end": "Selling End",
            "trade_number": 250,
        }, format="json")
        assert response.status_code == 201
        pk = response.json()["id"]

        response = api_client.patch(f"/api/lawyers/{pk}/", {"company_name": "Adler LLP"}, format="json")
        assert response.json()["company_name"] == "Adler LLP"

        assert api_client.delete(f"/api/lawyers/{pk}/").status_code == 204
        assert not Lawyer.objects.exists()

    def test_lawyer_rejects_unknown_type(self, api_client):
        response = api_client.post("/api/lawyers/", {
            "type": "Notary",
            "first_name": "Ruth",
            "last_name": "Adler",
            "end": "Selling End",
        }, format="json")
        assert response.status_code == 400

    def test_outside_broker_defaults(self, api_client):
        response = api_client.post("/api/outside-brokers/", {
            "type": "Cooperating Broker",
            "first_name": "Max",
            "last_name": "Ward",
            "company": "Big City Brokerage",
            "end": "Listing End",
        }, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["pay_broker"] == "No"
        assert data["charged_hst"] == "Yes"
        assert OutsideBroker.objects.get(pk=data["id"]).company == "Big City Brokerage"

    def test_requires_authentication(self, client):
        assert client.get("/api/lawyers/").status_code == 401
