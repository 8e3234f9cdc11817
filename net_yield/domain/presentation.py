"""Display formatting for simulation results"""

from decimal import Decimal, ROUND_HALF_UP

from net_yield.domain.models import ResultDisplay, SimulationResult

TWO_PLACES = Decimal("0.01")


def round_half_up(value: float) -> Decimal:
    """
    Round the exact binary value to 2 decimals, ties away from zero.

    0.125 is exact in binary and becomes 0.13; 1.005 is stored as
    1.00499999... and stays 1.00.
    """
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_currency(amount: float) -> str:
    """Fixed-point dollars with 2 decimals: 858.333 -> "$858.33" """
    return f"${round_half_up(amount)}"


def format_percentage(pct: float) -> str:
    """Fixed-point percentage with 2 decimals: 0.42916 -> "0.43%" """
    return f"{round_half_up(pct)}%"


def format_result(result: SimulationResult) -> ResultDisplay:
    """Render a result for display; raw values stay unrounded on the result itself"""
    show_expected = result.data_driven is not None

    return ResultDisplay(
        average_monthly_net_income=format_currency(result.average_monthly_net_income),
        monthly_net_return=format_percentage(result.monthly_net_return_pct),
        show_expected=show_expected,
        expected_monthly_net_income=(
            format_currency(result.expected_monthly_net_income) if show_expected else None
        ),
        expected_monthly_net_return=(
            format_percentage(result.expected_monthly_net_return_pct) if show_expected else None
        ),
    )
