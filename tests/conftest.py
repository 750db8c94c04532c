"""
Pytest fixtures for the money kernel test suite.

Provides:
- Structured logging setup and log capture
- Policies for the common currency shapes (0, 2 and 3 decimals)
- A money YAML file factory for configuration tests
"""

import json
import logging
from io import StringIO
from pathlib import Path

import pytest
import yaml

from money_kernel.domain.policy import MoneyPolicy
from money_kernel.domain.rounding import RoundingMode
from money_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture money_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            get_active_policy()
            logs = captured_logs()
            assert any(r["message"] == "MONEY_CONFIG_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("money_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Policy fixtures
# =============================================================================


@pytest.fixture
def default_policy() -> MoneyPolicy:
    """Two decimals, HALF_UP, negatives rejected."""
    return MoneyPolicy()


@pytest.fixture
def lenient_policy() -> MoneyPolicy:
    """Two decimals, HALF_UP, negatives allowed."""
    return MoneyPolicy(allow_negative=True)


@pytest.fixture
def zero_decimal_policy() -> MoneyPolicy:
    """Currencies without subdivision (JPY, XOF)."""
    return MoneyPolicy(precision=0)


@pytest.fixture
def three_decimal_policy() -> MoneyPolicy:
    """Three-decimal currencies (KWD, BHD, TND)."""
    return MoneyPolicy(precision=3)


@pytest.fixture
def banker_policy() -> MoneyPolicy:
    """Two decimals with banker's rounding."""
    return MoneyPolicy(rounding_mode=RoundingMode.HALF_EVEN)


# =============================================================================
# Configuration fixtures
# =============================================================================


@pytest.fixture
def write_money_yaml(tmp_path):
    """Write a money YAML file under tmp_path and return its path."""

    def _write(settings: dict | None, name: str = "money.yaml", raw: str | None = None) -> Path:
        path = tmp_path / name
        if raw is not None:
            path.write_text(raw)
        else:
            path.write_text(yaml.safe_dump(settings))
        return path

    return _write
