"""Services package for CLV insights."""

from clv_insights.services.customer_completion import CustomerCompleter
from clv_insights.services.gemini_pipeline import GeminiPipeline
from clv_insights.services.portfolio import search_customers, summarize_portfolio
from clv_insights.services.recommendations import MarketingAdvisor

__all__ = [
    "CustomerCompleter",
    "GeminiPipeline",
    "MarketingAdvisor",
    "search_customers",
    "summarize_portfolio",
]
