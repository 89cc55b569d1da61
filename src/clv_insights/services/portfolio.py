"""Portfolio figures and search over extracted customers."""

from collections import Counter

from clv_insights.models.schemas import Customer, PortfolioSummary

TOP_CUSTOMERS = 5


def summarize_portfolio(customers: list[Customer], top_n: int = TOP_CUSTOMERS) -> PortfolioSummary:
    """Compute total and average CLV, segment counts and the top customers by CLV."""
    total_clv = sum(c.clv_data.clv_estimate for c in customers)
    average_clv = total_clv / len(customers) if customers else 0.0
    segment_counts = Counter(c.segment for c in customers)
    top_customers = sorted(customers, key=lambda c: c.clv_data.clv_estimate, reverse=True)[:top_n]

    return PortfolioSummary(
        total_customers=len(customers),
        total_predicted_clv=float(total_clv),
        average_clv=float(average_clv),
        segment_counts=dict(segment_counts),
        top_customers=top_customers,
    )


def search_customers(customers: list[Customer], term: str) -> list[Customer]:
    """Case-insensitive substring match on id, state or policy type."""
    needle = term.lower()
    return [
        c
        for c in customers
        if needle in c.id.lower()
        or needle in c.state.lower()
        or needle in c.policy_type.lower()
    ]
