import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from corujo_core.adapters.utils.phone_utils import format_phone


class FormatterService:
    """
    Utility service for formatting numbers, dates, phones and currencies
    in Brazilian style (e.g. R$ 1.234,56, (11) 98765-4321 and DD/MM/YYYY).
    """

    def __init__(self, currency_symbol: str = "R$"):
        self.currency_symbol = currency_symbol

    def format_currency(self, amount: Decimal | float | int | None) -> str:
        """
        Format a numeric value as a BRL currency string,
        e.g. R$ 1.234,56
        """
        if amount is None:
            return ""
        amt = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        # US style grouping; we'll swap comma/dot for Brazilian style
        us_str = f"{amt:,.2f}"  # e.g. "1,234.56"
        integer_part, decimal_part = us_str.split(".")
        integer_brl = integer_part.replace(",", ".")
        return f"{self.currency_symbol} {integer_brl},{decimal_part}"

    def parse_currency_input(self, raw: str | None) -> Decimal | None:
        """
        Converts what the user typed into the money mask: only the digits
        count and the last two are cents, e.g. "123456" → 1234.56.
        """
        digits = re.sub(r"\D", "", raw or "")
        if not digits:
            return None
        return (Decimal(digits) / 100).quantize(Decimal("0.01"))

    def format_phone(self, raw: str | None) -> str:
        return format_phone(raw or "")

    def format_date(self, d: date | datetime | None) -> str:
        """
        Format a date (or datetime) as DD/MM/YYYY.
        """
        if d is None:
            return ""
        if isinstance(d, datetime):
            d = d.date()
        return d.strftime("%d/%m/%Y")

    def format_percentage(self, pct: float | int) -> str:
        """
        Format a percentage with one decimal place, e.g. 66,7%
        """
        return f"{pct:.1f}%".replace(".", ",")
