"""Shared fixtures for CLV insights tests."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from clv_insights.infrastructure.gemini_client import GeminiClient

CSV_HEADER = (
    "Customer,State,Customer Lifetime Value,Response,Coverage,Education,"
    "EmploymentStatus,Gender,Income,Location Code,Marital Status,Monthly Premium Auto,"
    "Months Since Last Claim,Months Since Policy Inception,Number of Open Complaints,"
    "Number of Policies,Policy Type,Policy,Renew Offer Type,Sales Channel,"
    "Total Claim Amount,Vehicle Class,Vehicle Size"
)


def make_customer_dict(
    customer_id: str = "BU79786",
    clv_estimate: float = 2763.52,
    segment: str = "Loyal",
    state: str = "Washington",
    policy_type: str = "Corporate Auto",
    **overrides,
) -> dict:
    """Build a camelCase customer payload as Gemini would return it."""
    data = {
        "id": customer_id,
        "state": state,
        "response": "No",
        "coverage": "Basic",
        "education": "Bachelor",
        "employmentStatus": "Employed",
        "gender": "Female",
        "income": 56274,
        "locationCode": "Suburban",
        "maritalStatus": "Married",
        "monthlyPremiumAuto": 69,
        "monthsSinceLastClaim": 32,
        "monthsSincePolicyInception": 5,
        "numberOfOpenComplaints": 0,
        "numberOfPolicies": 1,
        "policyType": policy_type,
        "policy": "Corporate L3",
        "renewOfferType": "Offer1",
        "salesChannel": "Agent",
        "totalClaimAmount": 384.81,
        "vehicleClass": "Two-Door Car",
        "vehicleSize": "Medsize",
        "segment": segment,
        "clvData": {
            "clvEstimate": clv_estimate,
            "confidenceInterval": [clv_estimate * 0.8, clv_estimate * 1.2],
            "recency": 32,
            "frequency": 1,
            "monetary": 69,
            "purchaseProbability": 0.62,
            "expectedPurchases": 1.4,
            "shapValues": [
                {"feature": "Income", "value": 310.5},
                {"feature": "Months Since Last Claim", "value": -120.0},
            ],
        },
    }
    data.update(overrides)
    return data


def make_csv(row_count: int) -> str:
    """Build a CSV document with the given number of numbered data rows."""
    rows = [
        f"C{i:04d},Arizona,5000,No,Basic,Bachelor,Employed,M,40000,Urban,Single,90,10,20,0,2,"
        "Personal Auto,Personal L2,Offer1,Web,300,SUV,Medsize"
        for i in range(1, row_count + 1)
    ]
    return "\n".join([CSV_HEADER, *rows])


def batch_response(batch_csv: str) -> str:
    """Gemini-style JSON array echoing the customer ids of a CSV batch."""
    ids = [line.split(",", 1)[0] for line in batch_csv.strip().split("\n")[1:]]
    return json.dumps([make_customer_dict(customer_id=i) for i in ids])


@pytest.fixture
def customer_dict() -> dict:
    return make_customer_dict()


@pytest.fixture
def mock_gemini_client() -> MagicMock:
    client = MagicMock(spec=GeminiClient)
    client.generate_json = AsyncMock()
    return client
