"""Models package for CLV insights."""

from clv_insights.models.schemas import (
    CLVData,
    Customer,
    IngestionResult,
    MarketingAction,
    PartialCustomer,
    PortfolioSummary,
    ShapValue,
)

__all__ = [
    "CLVData",
    "Customer",
    "IngestionResult",
    "MarketingAction",
    "PartialCustomer",
    "PortfolioSummary",
    "ShapValue",
]
