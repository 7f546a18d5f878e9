"""Shared pytest markers describing where a test may run."""

from __future__ import annotations

import pytest

OS_AGNOSTIC = pytest.mark.os_agnostic
WINDOWS_ONLY = pytest.mark.windows_only

__all__ = ["OS_AGNOSTIC", "WINDOWS_ONLY"]
