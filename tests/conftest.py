"""Shared test fixtures for ngapigen.

Provides spec fixtures (raw and parsed), a copy of the sample templates, and
automatic cleanup of the global output and logging state. These fixtures are
discovered by pytest and available to all test modules without imports.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any

import pytest
import yaml

from ngapigen.models import ParsedSpec
from ngapigen.output import reset_output
from ngapigen.parser import extract_spec


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and the package logger after every test.

    Both hold references to the streams CliRunner swaps in during a test.
    The logger is also put back to propagating so ``caplog`` sees records.
    """
    yield
    reset_output()
    logger = logging.getLogger("ngapigen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def _clean_option_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep NGAPIGEN_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("NGAPIGEN_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def courses_path() -> Path:
    return FIXTURES_DIR / "courses.yaml"


@pytest.fixture
def orders_path() -> Path:
    return FIXTURES_DIR / "orders.json"


@pytest.fixture
def courses_raw(courses_path: Path) -> dict[str, Any]:
    """Load the raw course catalog spec (OpenAPI 3.0, YAML)."""
    return yaml.safe_load(courses_path.read_text(encoding="utf-8"))


@pytest.fixture
def orders_raw(orders_path: Path) -> dict[str, Any]:
    """Load the raw orders spec (OpenAPI 3.1, JSON)."""
    return json.loads(orders_path.read_text(encoding="utf-8"))


@pytest.fixture
def courses_spec(courses_raw: dict[str, Any]) -> ParsedSpec:
    return extract_spec(courses_raw, "3.0.3")


@pytest.fixture
def orders_spec(orders_raw: dict[str, Any]) -> ParsedSpec:
    return extract_spec(orders_raw, "3.1.0")


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Copy the sample templates into a scratch directory."""
    target = tmp_path / "templates"
    shutil.copytree(FIXTURES_DIR / "templates", target)
    return target
