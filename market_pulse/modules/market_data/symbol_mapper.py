from __future__ import annotations

import re

from market_pulse.core.errors import ValidationError

# Yahoo-style tickers: equities (AAPL, BRK-B), indices (^GSPC), FX (EURUSD=X),
# and exchange suffixes (0700.HK).
_SYMBOL_RE = re.compile(r"^\^?[A-Z0-9][A-Z0-9.\-]{0,14}(?:=[A-Z])?$")


def normalize_symbol(symbol: str) -> str:
    raw = str(symbol or "").strip().upper()
    if not raw or not _SYMBOL_RE.match(raw):
        raise ValidationError(f"Invalid symbol: {symbol!r}")
    return raw
