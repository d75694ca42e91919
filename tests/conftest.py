# tests/conftest.py
"""Global PyTest fixtures for the test-suite.

Most tests run the analyses over in-memory content mappings. The fixtures
here build a small on-disk Next.js-style project for the CLI, discovery and
configuration tests.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest


WriteFiles = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_project(tmp_path: Path) -> WriteFiles:
    """Write ``{relative path: source}`` under a fresh project root."""
    root = tmp_path / "web"
    root.mkdir()

    def _write(files: dict[str, str]) -> Path:
        for relative, source in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return root

    return _write


@pytest.fixture
def sample_project(write_project: WriteFiles) -> Path:
    """A project with one pure, one impure and one transitively impure component."""
    return write_project(
        {
            "tsconfig.json": """
            {
              // Next.js default alias
              "compilerOptions": {
                "baseUrl": ".",
                "paths": { "@/*": ["./*"] },
              },
            }
            """,
            "components/pure-component.tsx": """
            import React from "react";
            import { clsx } from "clsx";
            import { Button } from "@/components/ui/button";

            export function PureComponent() {
              return <Button className={clsx("px-4 py-2")}>Click me</Button>;
            }
            """,
            "components/ui/button.tsx": """
            export function Button(props: { className?: string; children?: React.ReactNode }) {
              return <button className={props.className}>{props.children}</button>;
            }
            """,
            "components/impure-component.tsx": """
            import React from "react";
            import { getUserData } from "@/lib/api";

            export function ImpureComponent() {
              const [data, setData] = React.useState(null);
              React.useEffect(() => {
                getUserData().then(setData);
              }, []);
              return <div>{data?.name}</div>;
            }
            """,
            "components/helper.ts": """
            import { db } from "@/db/client";

            export function formatDate(date: Date): string {
              return date.toISOString();
            }
            """,
            "components/transitive-impure.tsx": """
            import React from "react";
            import { formatDate } from "./helper.js";

            export function TransitiveImpure() {
              return <div>{formatDate(new Date())}</div>;
            }
            """,
            "lib/api.ts": """
            export async function getUserData() {
              const response = await fetch("/api/user");
              return response.json();
            }
            """,
            "node_modules/pkg/index.js": "module.exports = {};\n",
        }
    )
