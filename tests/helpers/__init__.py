# tests/helpers/__init__.py
"""Shared test utilities for the dscoverage test suite.

Usage:
    >>> from tests.helpers import expect_success, make_contents, make_purity_config
    >>> contents = make_contents({"components/Card.tsx": "export const Card = () => null;"})
"""

from __future__ import annotations

from tests.helpers.constants import (
    BUSINESS_DIR_MATCHERS,
    COMPONENTS_DIR,
    FORBIDDEN_IMPORT_MATCHERS,
    NEXT_SERVER_IMPORT_MATCHERS,
    PROJECT_ROOT,
)
from tests.helpers.factories import (
    make_alias_table,
    make_analysis_config,
    make_business_logic_config,
    make_contents,
    make_purity_config,
)
from tests.helpers.result_utils import expect_failure, expect_success

__all__ = [
    "BUSINESS_DIR_MATCHERS",
    "COMPONENTS_DIR",
    "FORBIDDEN_IMPORT_MATCHERS",
    "NEXT_SERVER_IMPORT_MATCHERS",
    "PROJECT_ROOT",
    "expect_failure",
    "expect_success",
    "make_alias_table",
    "make_analysis_config",
    "make_business_logic_config",
    "make_contents",
    "make_purity_config",
]
