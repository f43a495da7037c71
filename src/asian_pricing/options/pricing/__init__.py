"""
Option pricing implementations.

Provides:
- Black-Scholes analytical call pricing
- Bachelier analytical call pricing
"""

from asian_pricing.options.pricing.bachelier import bachelier_call
from asian_pricing.options.pricing.black_scholes import black_scholes_call

__all__ = [
    "bachelier_call",
    "black_scholes_call",
]
