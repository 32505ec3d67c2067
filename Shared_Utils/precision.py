from decimal import Decimal, ROUND_HALF_EVEN, InvalidOperation

from Config.constants_core import DEFAULT_DISPLAY_PLACES


class PrecisionUtils:
    """
    Decimal helpers for parsing and presentation.

    Nothing here is used inside the matching loop: gains are accumulated at
    full precision and only rounded on the way out.
    """

    def __init__(self, display_places: int = DEFAULT_DISPLAY_PLACES):
        self.display_places = display_places

    @staticmethod
    def safe_decimal(value, default="0") -> Decimal:
        """Decimal(value) or Decimal(default) when value is not a number."""
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value).strip())
        except (TypeError, ValueError, InvalidOperation):
            return Decimal(default)

    @staticmethod
    def parse_decimal(raw) -> Decimal:
        """
        Strict parse from text. Raises ValueError on anything that is not a
        finite number, so malformed prices never become zero silently.
        """
        try:
            value = Decimal(str(raw).strip())
        except InvalidOperation:
            raise ValueError(f"not a decimal number: {raw!r}") from None
        if not value.is_finite():
            raise ValueError(f"not a finite number: {raw!r}")
        return value

    @staticmethod
    def quant_from_places(decimal_places: int) -> Decimal:
        """Return a quantizer Decimal like 1e-5 for decimal_places=5."""
        if not isinstance(decimal_places, int) or decimal_places < 0:
            raise ValueError(f"decimal_places must be a non-negative int, got {decimal_places!r}")
        return Decimal('1').scaleb(-decimal_places)

    def round_with_bankers(self, value: Decimal, places: int = None) -> Decimal:
        """
        Round using banker's rounding (ROUND_HALF_EVEN).

        Example:
            >>> PrecisionUtils().round_with_bankers(Decimal('1100.005'))
            Decimal('1100.00')
        """
        places = self.display_places if places is None else places
        return self.safe_decimal(value).quantize(self.quant_from_places(places), rounding=ROUND_HALF_EVEN)

    def format_money(self, value: Decimal, places: int = None, signed: bool = False) -> str:
        """
        Format a money amount for display.

        Example:
            >>> PrecisionUtils().format_money(Decimal('-100'))
            '-$100.00'
        """
        rounded = self.round_with_bankers(value, places)
        if rounded == 0:
            rounded = abs(rounded)  # no "-$0.00"
        sign = "-" if rounded < 0 else ("+" if signed and rounded > 0 else "")
        return f"{sign}${abs(rounded):,}"
