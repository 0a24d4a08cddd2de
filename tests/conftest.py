from __future__ import annotations

import sys

import pytest

from ssmul import runtime


@pytest.fixture(autouse=True)
def _fresh_runtime():
    """Every test starts from default settings."""
    runtime.reset()
    yield
    runtime.reset()


@pytest.fixture(autouse=True)
def _restore_int_str_limit():
    # the CLI raises the interpreter-wide int/str digit limit
    limit = sys.get_int_max_str_digits()
    yield
    sys.set_int_max_str_digits(limit)
