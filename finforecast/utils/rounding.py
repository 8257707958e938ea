# PURPOSE: Round projected money to whole currency units.
# CONTEXT: Every monetary field of a ForecastPoint passes through round_money.

from decimal import Decimal, ROUND_FLOOR


def round_money(x) -> int:
    """
    Round a float or Decimal to an integer amount.

    parameters:
    - x: float | Decimal – raw projected value.

    returns:
    - int – nearest whole unit; 0 for NaN or an infinity.

    notes:
    - Uses Decimal so results do not depend on binary float tie-breaking.
    - Ties round towards +infinity (floor of x + 0.5): 2.5 -> 3, -2.5 -> -2.
    """
    d = Decimal(x)
    if not d.is_finite():
        return 0
    return int((d + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))
