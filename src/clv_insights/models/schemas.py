"""Pydantic models for customers, CLV estimates and Lambda events."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

CustomerSegment = Literal["Champion", "Loyal", "At Risk", "Lost", "Newcomer"]
Gender = Literal["Male", "Female"]

CUSTOMER_SEGMENTS: tuple[str, ...] = ("Champion", "Loyal", "At Risk", "Lost", "Newcomer")

NonEmptyStr = Annotated[str, Field(min_length=1)]


class CamelModel(BaseModel):
    """Strict model exchanged with the remote service as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="forbid",
    )


class ShapValue(CamelModel):
    """Signed contribution of one feature to the CLV estimate."""

    feature: NonEmptyStr
    value: float


class CLVData(CamelModel):
    """CLV estimate with RFM proxies and drivers."""

    clv_estimate: float
    confidence_interval: list[float] = Field(min_length=2, max_length=2)
    recency: int  # Months Since Last Claim
    frequency: int  # Number of Policies
    monetary: float  # Monthly Premium Auto
    purchase_probability: float = Field(ge=0.0, le=1.0)
    expected_purchases: float
    shap_values: list[ShapValue]

    @field_validator("confidence_interval")
    @classmethod
    def _ordered_interval(cls, value: list[float]) -> list[float]:
        if value[0] > value[1]:
            raise ValueError("confidence interval lower bound exceeds upper bound")
        return value


class Customer(CamelModel):
    """A fully enriched insurance customer."""

    id: NonEmptyStr
    state: str
    response: str | None = None
    coverage: str
    education: str
    employment_status: str
    gender: Gender
    income: float
    location_code: str
    marital_status: str
    monthly_premium_auto: float
    months_since_last_claim: int
    months_since_policy_inception: int
    number_of_open_complaints: int
    number_of_policies: int
    policy_type: str
    policy: str
    renew_offer_type: str
    sales_channel: str
    total_claim_amount: float
    vehicle_class: str
    vehicle_size: str
    segment: CustomerSegment
    clv_data: CLVData


class PartialCustomer(CamelModel):
    """Sparse attributes for a new customer to be completed remotely."""

    model_config = ConfigDict(strict=False)

    id: NonEmptyStr
    state: str | None = None
    coverage: str | None = None
    education: str | None = None
    income: float | None = None
    monthly_premium_auto: float | None = None
    months_since_last_claim: int | None = None
    number_of_policies: int | None = None


class MarketingAction(CamelModel):
    """A single marketing recommendation for a customer."""

    title: NonEmptyStr
    description: NonEmptyStr
    rationale: NonEmptyStr


class PortfolioSummary(CamelModel):
    """Dashboard figures computed over a set of customers."""

    total_customers: int
    total_predicted_clv: float
    average_clv: float
    segment_counts: dict[str, int]
    top_customers: list[Customer]


class IngestionResult(CamelModel):
    """Customers extracted from a CSV file with their portfolio summary."""

    customers: list[Customer]
    summary: PortfolioSummary


class IngestEvent(BaseModel):
    """Lambda event asking to ingest a CSV, inline or from S3."""

    action: Literal["ingest"]
    csv_content: str | None = None
    bucket: str | None = None
    key: str | None = None

    @model_validator(mode="after")
    def _has_source(self) -> "IngestEvent":
        if self.csv_content is None and not self.key:
            raise ValueError("either csv_content or key is required")
        return self


class CompleteEvent(BaseModel):
    """Lambda event asking to complete a partial customer."""

    action: Literal["complete"]
    customer: PartialCustomer


class RecommendEvent(BaseModel):
    """Lambda event asking for marketing recommendations."""

    action: Literal["recommend"]
    customer: Customer


LambdaEvent = Annotated[
    Union[IngestEvent, CompleteEvent, RecommendEvent],
    Field(discriminator="action"),
]
