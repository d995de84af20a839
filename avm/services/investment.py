from ..data.base import PropertyRecord
from ..report import InvestmentMetrics

EXPENSE_RATIO = 0.25        # taxes, maintenance, vacancy, management
FINANCING_COST = 0.04       # of value, per year
DOWN_PAYMENT = 0.20         # of value
VALUE_GROWTH = 1.05
RENT_GROWTH = 1.03
PROJECTION_YEARS = 5

def investment_metrics(prop: PropertyRecord, estimated_value: float) -> InvestmentMetrics:
    """
    Rental metrics for the estimated value. Without rent data every field
    stays None.
    """
    if not prop.has_rent or estimated_value <= 0:
        return InvestmentMetrics()

    annual_rent = prop.rent_price * 12
    net_annual_rent = annual_rent * (1 - EXPENSE_RATIO)
    net_yield = net_annual_rent / estimated_value * 100
    cash_flow = net_annual_rent - estimated_value * FINANCING_COST
    down_payment = estimated_value * DOWN_PAYMENT

    future_value = estimated_value * VALUE_GROWTH ** PROJECTION_YEARS
    future_annual_rent = prop.rent_price * RENT_GROWTH ** PROJECTION_YEARS * 12
    total_return = (future_value + future_annual_rent * PROJECTION_YEARS - estimated_value) / estimated_value * 100

    return InvestmentMetrics(
        gross_rental_yield=annual_rent / estimated_value * 100,
        net_rental_yield=net_yield,
        cap_rate=net_yield,
        cash_flow=cash_flow,
        roi=cash_flow / down_payment * 100,
        # Floor of one currency unit keeps a negative cash flow from giving a negative payback
        payback_period=down_payment / max(cash_flow, 1),
        total_return_5y=total_return,
    )
