# File: src/dscoverage/reasons.py
"""Violation reason ADTs attached to purity reports.

The four variants form a closed union; consumers dispatch with ``match`` and
``assert_never`` so adding a variant is a type error until every consumer
handles it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ForbiddenImport:
    """Import of a forbidden specifier or of a business-logic location."""

    import_path: str
    message: str
    resolved_path: str | None = None
    line: int | None = None
    kind: Literal["forbidden-import"] = "forbidden-import"


@dataclass(frozen=True)
class ServerApiImport:
    """Import of a server-only framework API."""

    import_path: str
    message: str
    line: int | None = None
    resolved_path: str | None = None
    kind: Literal["server-api"] = "server-api"


@dataclass(frozen=True)
class TransitiveImport:
    """Relative import of a file that itself violates the boundary."""

    import_path: str
    message: str
    resolved_path: str | None = None
    line: int | None = None
    kind: Literal["transitive"] = "transitive"


@dataclass(frozen=True)
class DataFetching:
    """Network-call idioms found in the file text."""

    message: str = "Data fetching detected (fetch/axios)"
    import_path: str = ""
    resolved_path: str | None = None
    line: int | None = None
    kind: Literal["data-fetching"] = "data-fetching"


DirectReason = ForbiddenImport | ServerApiImport
ViolationReason = ForbiddenImport | ServerApiImport | TransitiveImport | DataFetching
ReasonKind = Literal["forbidden-import", "server-api", "transitive", "data-fetching"]

REASON_KINDS: tuple[ReasonKind, ...] = ("forbidden-import", "server-api", "transitive", "data-fetching")

REASON_WEIGHTS: dict[ReasonKind, int] = {
    "forbidden-import": 30,
    "server-api": 25,
    "transitive": 15,
    "data-fetching": 10,
}
"""Score contribution of each reason kind."""


__all__ = [
    "DataFetching",
    "DirectReason",
    "ForbiddenImport",
    "REASON_KINDS",
    "REASON_WEIGHTS",
    "ReasonKind",
    "ServerApiImport",
    "TransitiveImport",
    "ViolationReason",
]
