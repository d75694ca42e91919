# File: src/dscoverage/messages.py
"""Explanations for purity reason kinds.

Provides short and long messages with before/after examples for each kind of
violation reason, used by ``dscoverage explain`` and the verbose text output.
"""

from __future__ import annotations

from dataclasses import dataclass

from dscoverage.reasons import REASON_WEIGHTS, ReasonKind, ViolationReason


@dataclass(frozen=True)
class ReasonMessage:
    """Explanation template for one reason kind."""

    kind: ReasonKind
    short_message: str
    long_message: str
    before_example: str
    after_example: str

    @property
    def weight(self) -> int:
        return REASON_WEIGHTS[self.kind]


FORBIDDEN_IMPORT_MESSAGE = ReasonMessage(
    kind="forbidden-import",
    short_message="UI file imports business logic",
    long_message=(
        "UI components must not import data access, server code or feature logic.\n"
        "The specifier matched a forbidden import matcher, or resolved into a\n"
        "configured business-logic directory.\n"
        "Pass data in through props or move the logic into a hook owned by the page."
    ),
    before_example=(
        "// ❌ components/UserCard.tsx\n"
        'import { db } from "@/db/client";\n'
        "export function UserCard({ id }) {\n"
        "  const user = db.user.find(id);\n"
        "  return <Card>{user.name}</Card>;\n"
        "}"
    ),
    after_example=(
        "// ✅ components/UserCard.tsx\n"
        "export function UserCard({ name }: { name: string }) {\n"
        "  return <Card>{name}</Card>;\n"
        "}"
    ),
)

SERVER_API_MESSAGE = ReasonMessage(
    kind="server-api",
    short_message="UI file uses a server-only API",
    long_message=(
        "Server-only framework APIs (next/headers, next/cache, ...) tie a component\n"
        "to the server runtime. Read request data in the page or layout and pass\n"
        "plain values down."
    ),
    before_example=(
        "// ❌ components/Greeting.tsx\n"
        'import { cookies } from "next/headers";\n'
        "export function Greeting() {\n"
        '  return <p>Hi {cookies().get("name")?.value}</p>;\n'
        "}"
    ),
    after_example=(
        "// ✅ components/Greeting.tsx\n"
        "export function Greeting({ name }: { name: string }) {\n"
        "  return <p>Hi {name}</p>;\n"
        "}"
    ),
)

TRANSITIVE_MESSAGE = ReasonMessage(
    kind="transitive",
    short_message="UI file reaches business logic through a local import",
    long_message=(
        "A relative import of this file points at a helper that itself imports\n"
        "business logic. Only one hop is inspected: the helper's own direct\n"
        "imports decide the verdict."
    ),
    before_example=(
        "// ❌ components/helper.ts\n"
        'import { db } from "@/db/client";\n'
        "// components/Row.tsx\n"
        'import { formatRow } from "./helper";'
    ),
    after_example=(
        "// ✅ keep formatting helpers free of data access\n"
        "export const formatRow = (row: Row) => `${row.id}: ${row.label}`;"
    ),
)

DATA_FETCHING_MESSAGE = ReasonMessage(
    kind="data-fetching",
    short_message="UI file fetches data",
    long_message=(
        "fetch() or axios calls were found in the file text. Network access\n"
        "belongs in data hooks or server components, not in reusable UI."
    ),
    before_example=(
        "// ❌\n"
        "useEffect(() => { fetch('/api/items').then(setItems); }, []);"
    ),
    after_example=(
        "// ✅\n"
        "const items = useItems();  // hook owns the request"
    ),
)

REASON_MESSAGES: dict[ReasonKind, ReasonMessage] = {
    "forbidden-import": FORBIDDEN_IMPORT_MESSAGE,
    "server-api": SERVER_API_MESSAGE,
    "transitive": TRANSITIVE_MESSAGE,
    "data-fetching": DATA_FETCHING_MESSAGE,
}


def format_reason(path: str, reason: ViolationReason, verbose: bool = False) -> str:
    """Format one reason as ``path:line - message (kind)``."""
    location = f"{path}:{reason.line}" if reason.line is not None else path
    output = f"{location} - {reason.message} ({reason.kind})"
    if reason.resolved_path:
        output += f"\n  Resolved: {reason.resolved_path}"
    if verbose:
        message = REASON_MESSAGES[reason.kind]
        output += f"\n\n{message.long_message}"
    return output


def explain_reason(kind: str) -> str:
    """Detailed explanation with examples for a reason kind."""
    message = next((m for known_kind, m in REASON_MESSAGES.items() if known_kind == kind), None)
    if message is None:
        known = ", ".join(REASON_MESSAGES)
        return f"Unknown reason kind: {kind} (expected one of: {known})"

    return (
        f"{message.kind} (+{message.weight}): {message.short_message}\n"
        f"\n{message.long_message}"
        f"\n\nBefore:\n{message.before_example}"
        f"\n\nAfter:\n{message.after_example}"
    )


__all__ = [
    "REASON_MESSAGES",
    "ReasonMessage",
    "explain_reason",
    "format_reason",
]
