from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional


class Currency(NamedTuple):
    value: str
    label: str
    locale: str


CURRENCIES = [
    Currency(value="USD", label="$ Dollar", locale="en-US"),
    Currency(value="EUR", label="€ Euro", locale="de-DE"),
    Currency(value="JPY", label="¥ Yen", locale="ja-JP"),
    Currency(value="GBP", label="£ Pound", locale="en-GB"),
    Currency(value="PEN", label="S Sol", locale="es-ES"),
]

_SYMBOLS = {"USD": "$", "EUR": "€", "JPY": "¥", "GBP": "£", "PEN": "S/"}
_FRACTION_DIGITS = {"JPY": 0}


class _LocaleFormat(NamedTuple):
    group: str
    decimal: str
    symbol_first: bool


_LOCALE_FORMATS = {
    "en-US": _LocaleFormat(",", ".", True),
    "en-GB": _LocaleFormat(",", ".", True),
    "ja-JP": _LocaleFormat(",", ".", True),
    "de-DE": _LocaleFormat(".", ",", False),
    "es-ES": _LocaleFormat(".", ",", False),
}


def get_currency(code: str) -> Optional[Currency]:
    for currency in CURRENCIES:
        if currency.value == code:
            return currency
    return None


def is_supported_currency(code: str) -> bool:
    return get_currency(code) is not None


def format_amount(amount, code: str) -> str:
    """Format an amount for display, e.g. '$1,234.56' or '1.234,56 €'."""
    currency = get_currency(code)
    if currency is None:
        raise ValueError(f"Unsupported currency: {code}")
    fmt = _LOCALE_FORMATS[currency.locale]
    digits = _FRACTION_DIGITS.get(code, 2)

    value = Decimal(str(amount)).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    number = f"{abs(value):,.{digits}f}"
    number = number.replace(",", "\x00").replace(".", fmt.decimal).replace("\x00", fmt.group)

    symbol = _SYMBOLS[code]
    if fmt.symbol_first:
        return f"{sign}{symbol}{number}"
    return f"{sign}{number} {symbol}"
