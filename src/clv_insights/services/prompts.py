"""Prompt builders for the Gemini calls."""

from clv_insights.models.schemas import Customer, PartialCustomer

_ANALYSIS_RULES = """\
- recency: copy 'Months Since Last Claim'.
- frequency: copy 'Number of Policies'.
- monetary: copy 'Monthly Premium Auto'.
- clvEstimate: a plausible lifetime value; high income, many policies and a high premium mean a high CLV.
- confidenceInterval: a realistic 95% interval as [lower, upper] with lower <= upper.
- purchaseProbability (0 to 1): likelihood of renewal or another policy.
- expectedPurchases: expected number of future policies or renewals.
- segment: one of 'Champion', 'Loyal', 'At Risk', 'Lost', 'Newcomer'. Long tenure, many policies and a recent claim suggest 'Champion'; a very long time since the last claim suggests 'At Risk' or 'Lost'.
- shapValues: CLV drivers consistent with the profile, typically 'Income', 'Number of Policies', 'Monthly Premium Auto' and 'Months Since Policy Inception'."""


def build_batch_prompt(csv_chunk: str) -> str:
    """Instruction for turning one CSV batch into an array of customers."""
    return f"""You are a data scientist working for an insurance company.
Convert every row of the CSV below into one customer object.

The 'id' field is the 'Customer' column. Map the remaining columns to the matching fields.
Then fill 'segment' and 'clvData' for each customer:
{_ANALYSIS_RULES}

CSV data:
```csv
{csv_chunk}
```

Return only the JSON array of customer objects, following the response schema exactly."""


def build_completion_prompt(partial: PartialCustomer) -> str:
    """Instruction for completing a single sparse customer record."""
    known = "\n".join(
        f"- {name}: {value}"
        for name, value in partial.model_dump(by_alias=True).items()
        if value is not None
    )
    return f"""You are a data scientist working for an insurance company.
Complete the profile of one new customer from the partial data below.

Known attributes:
{known}

Keep the known attributes unchanged, including 'id'. Choose sensible values for the missing
attributes such as 'employmentStatus', 'gender' and 'maritalStatus'. Then fill 'segment' and 'clvData':
{_ANALYSIS_RULES}

Return only the single JSON customer object, following the response schema exactly."""


def build_recommendation_prompt(customer: Customer) -> str:
    """Instruction for marketing recommendations targeted at one customer."""
    clv = customer.clv_data
    drivers = "\n".join(
        f"  - {shap.feature}: {'positive' if shap.value > 0 else 'negative'} impact"
        for shap in clv.shap_values
    )
    return f"""You are a marketing strategist for an insurance company whose goal is to raise
customer lifetime value and retention.

Customer profile:
- Customer ID: {customer.id}
- State: {customer.state}
- Segment: {customer.segment}
- Predicted CLV: ${clv.clv_estimate:.2f}
- Employment Status: {customer.employment_status}
- Income: ${customer.income}
- Policies: {customer.number_of_policies} ({customer.policy_type})
- Coverage: {customer.coverage}
- Monthly Premium: ${customer.monthly_premium_auto}
- Months Since Last Claim: {customer.months_since_last_claim}
- Months Since Policy Inception: {customer.months_since_policy_inception}
- CLV drivers:
{drivers}

Give three distinct, actionable recommendations to improve this customer's retention and lifetime value.
Each needs a short title, a description of the action, and a rationale tied to this customer.

Return only the JSON array of objects with "title", "description" and "rationale" keys."""
