import unittest

from market_pulse.core.errors import ValidationError
from market_pulse.modules.market_data.symbol_mapper import normalize_symbol


class SymbolMapperTest(unittest.TestCase):
    def test_accepts_yahoo_style_symbols(self):
        cases = {
            " aapl ": "AAPL",
            "brk-b": "BRK-B",
            "^gspc": "^GSPC",
            "0700.hk": "0700.HK",
            "eurusd=x": "EURUSD=X",
        }
        for raw, expected in cases.items():
            with self.subTest(raw=raw):
                self.assertEqual(normalize_symbol(raw), expected)

    def test_rejects_malformed_symbols(self):
        for raw in ("", "   ", "BAD!SYMBOL", "AA PL", "A" * 20):
            with self.subTest(raw=raw):
                with self.assertRaises(ValidationError):
                    normalize_symbol(raw)


if __name__ == "__main__":
    unittest.main()
