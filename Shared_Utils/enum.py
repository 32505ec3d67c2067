from enum import Enum


class TransactionType(Enum):
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def parse(cls, raw: str) -> "TransactionType":
        """Case-insensitive lookup ('buy', ' Sell ' ...). Raises ValueError on unknown kinds."""
        key = str(raw).strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown transaction type {raw!r}") from None

    def __str__(self) -> str:
        return self.value
