"""Gemini structured-output schemas for customer extraction and recommendations."""

from google.genai import types

from clv_insights.models.schemas import CUSTOMER_SEGMENTS


def _string(description: str | None = None, enum: list[str] | None = None) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description, enum=enum)


def _number(description: str | None = None) -> types.Schema:
    return types.Schema(type=types.Type.NUMBER, description=description)


def _integer(description: str | None = None) -> types.Schema:
    return types.Schema(type=types.Type.INTEGER, description=description)


SHAP_VALUE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "feature": _string(),
        "value": _number(),
    },
    required=["feature", "value"],
)

CLV_DATA_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "clvEstimate": _number(),
        "confidenceInterval": types.Schema(
            type=types.Type.ARRAY,
            items=_number(),
            min_items=2,
            max_items=2,
        ),
        "recency": _integer("Use the value from 'Months Since Last Claim'."),
        "frequency": _integer("Use the value from 'Number of Policies'."),
        "monetary": _number("Use the value from 'Monthly Premium Auto'."),
        "purchaseProbability": _number(),
        "expectedPurchases": _number(),
        "shapValues": types.Schema(type=types.Type.ARRAY, items=SHAP_VALUE_SCHEMA),
    },
    required=[
        "clvEstimate",
        "confidenceInterval",
        "recency",
        "frequency",
        "monetary",
        "purchaseProbability",
        "expectedPurchases",
        "shapValues",
    ],
)

CUSTOMER_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "id": _string("The 'Customer' ID from the CSV."),
        "state": _string(),
        "response": _string(),
        "coverage": _string(),
        "education": _string(),
        "employmentStatus": _string(),
        "gender": _string(enum=["Male", "Female"]),
        "income": _number(),
        "locationCode": _string(),
        "maritalStatus": _string(),
        "monthlyPremiumAuto": _number(),
        "monthsSinceLastClaim": _integer(),
        "monthsSincePolicyInception": _integer(),
        "numberOfOpenComplaints": _integer(),
        "numberOfPolicies": _integer(),
        "policyType": _string(),
        "policy": _string(),
        "renewOfferType": _string(),
        "salesChannel": _string(),
        "totalClaimAmount": _number(),
        "vehicleClass": _string(),
        "vehicleSize": _string(),
        "segment": _string(enum=list(CUSTOMER_SEGMENTS)),
        "clvData": CLV_DATA_SCHEMA,
    },
    required=[
        "id",
        "state",
        "coverage",
        "education",
        "employmentStatus",
        "gender",
        "income",
        "locationCode",
        "maritalStatus",
        "monthlyPremiumAuto",
        "monthsSinceLastClaim",
        "monthsSincePolicyInception",
        "numberOfOpenComplaints",
        "numberOfPolicies",
        "policyType",
        "policy",
        "renewOfferType",
        "salesChannel",
        "totalClaimAmount",
        "vehicleClass",
        "vehicleSize",
        "segment",
        "clvData",
    ],
)

CUSTOMER_BATCH_SCHEMA = types.Schema(type=types.Type.ARRAY, items=CUSTOMER_SCHEMA)

MARKETING_ACTIONS_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": _string(),
            "description": _string(),
            "rationale": _string(),
        },
        required=["title", "description", "rationale"],
    ),
    min_items=1,
)
