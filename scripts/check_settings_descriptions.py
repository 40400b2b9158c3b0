"""Fail CI if Settings fields are missing descriptions or README coverage.

Walks every field reachable from ``cloudlog.Settings`` and checks:
- Non-empty description of at least ``--min-length`` characters
- With ``--readme``, each leaf field's ``CLOUDLOG_*`` variable is mentioned there

Exit code 1 when violations are found.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel

from cloudlog.core.settings import Settings

ENV_PREFIX = "CLOUDLOG_"
# Not meant to be set by users
SKIP_ENV_DOCS = {("schema_version",)}


def iter_fields(
    model: type[BaseModel], path: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], str, bool]]:
    """Yield ``(path, description, is_group)`` for every field, depth first."""
    for name, field in model.model_fields.items():
        annotation = field.annotation
        is_group = isinstance(annotation, type) and issubclass(annotation, BaseModel)
        yield path + (name,), field.description or "", is_group
        if is_group:
            yield from iter_fields(annotation, path + (name,))  # type: ignore[arg-type]


def env_name(path: tuple[str, ...]) -> str:
    return ENV_PREFIX + "__".join(part.upper() for part in path)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--min-length", type=int, default=15)
    parser.add_argument("--readme", type=Path, default=None)
    args = parser.parse_args()

    readme = args.readme.read_text(encoding="utf-8") if args.readme else None
    failures: list[str] = []

    for path, desc, is_group in iter_fields(Settings):
        dotted = ".".join(path)
        if len(desc.strip()) < args.min_length:
            failures.append(f"{dotted}: missing/short description")
        if readme is None or is_group or path in SKIP_ENV_DOCS:
            continue
        if env_name(path) not in readme:
            failures.append(f"{dotted}: {env_name(path)} not documented")

    if failures:
        print("Settings documentation problems:")
        for f in failures:
            print(f" - {f}")
        sys.exit(1)


if __name__ == "__main__":
    main()
