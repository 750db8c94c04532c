"""
Money Kernel - exact monetary arithmetic.

A fixed-point value type backed by arbitrary-precision integers with:
- Validated decimal numerals (never float)
- Explicit, digit-exact rounding modes
- Injected precision / rounding / negative-amount policy
- Immutable values
"""

__version__ = "0.1.0"
