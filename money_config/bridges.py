"""
Config → Kernel Bridge.

Converts a parsed MoneyConfig into the kernel's MoneyPolicy. Lives in
money_config (the producer) because the kernel must NEVER import
money_config.

Usage:
    from money_config.bridges import build_money_policy

    policy = build_money_policy(config)
    price = Money.of("19.99", policy=policy)
"""

from __future__ import annotations

from money_config.loader import ConfigurationError
from money_config.schema import MoneyConfig
from money_kernel.domain.policy import MoneyPolicy
from money_kernel.exceptions import PolicyError


def build_money_policy(config: MoneyConfig) -> MoneyPolicy:
    """Build a MoneyPolicy from MoneyConfig.

    Kernel policy errors (negative precision, unknown rounding mode) are
    re-raised as ConfigurationError naming the configuration source.
    """
    try:
        return MoneyPolicy(
            precision=config.precision,
            rounding_mode=config.rounding_mode,
            allow_negative=config.allow_negative,
        )
    except PolicyError as e:
        raise ConfigurationError(str(e), config.source) from e
