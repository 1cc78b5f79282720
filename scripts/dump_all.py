#!/usr/bin/env python3
"""Dump every collection the pyhotel library can read.

This script activates one store per table (rooms, guests, bookings and
payments), printing the parsed records and the columns pyhotel does not
model yet, so you can spot schema drift in the database.

Usage
-----
Set environment variables and run::

    export SUPABASE_URL="https://abcd.supabase.co"
    export SUPABASE_ANON_KEY="..."
    python scripts/dump_all.py

Options::

    --only rooms,guests  Only dump these collections (default: all)
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --ping               Run the connection check before dumping
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyhotel import CollectionStore, HotelClient, HotelConfig, HotelError  # noqa: E402
from pyhotel._redact import redact_for_log  # noqa: E402

_COLLECTIONS = ("rooms", "guests", "bookings", "payments")


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_record(record: Any, out: list[str]) -> dict[str, Any]:
    """Pretty-print one record and return its redacted dict form."""
    data = redact_for_log(record)
    extras = sorted((record.model_extra or {}).keys())
    out.append(f"  - id={record.id}")
    for key, value in data.items():
        if key == "id" or value is None:
            continue
        out.append(f"      {key}: {value}")
    if extras:
        out.append(f"      (unmodelled columns: {', '.join(extras)})")
    return data


async def dump_collection(name: str, store: CollectionStore[Any], *, json_mode: bool) -> dict[str, Any]:
    """Activate *store* and dump its mirror."""
    out: list[str] = [_section(f"{name.upper()}  table={store.spec.table}")]
    state = await store.activate()

    if state.error is not None:
        out.append(f"  !! {name} failed: {state.error}")
        result: dict[str, Any] = {"status": state.status, "error": str(state.error)}
    else:
        rows = [_format_record(record, out) for record in state.data or ()]
        out.append(f"\n  {len(rows)} record(s)")
        result = {"status": state.status, "records": rows}

    if not json_mode:
        print("\n".join(out))
    return result


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump every collection pyhotel can read for debugging / development.",
    )
    parser.add_argument("--only", help="Comma-separated collections to dump (default: all)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--ping", action="store_true", help="Run the connection check first")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    selected = _COLLECTIONS
    if args.only:
        selected = tuple(name.strip() for name in args.only.split(",") if name.strip())
        unknown = sorted(set(selected) - set(_COLLECTIONS))
        if unknown:
            parser.error(f"unknown collection(s): {', '.join(unknown)}")

    config = HotelConfig.from_env()
    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "url": config.url,
        "schema": config.schema,
        "collections": {},
    }

    if not args.json_mode:
        print(_section("pyhotel dump_all"))
        print(f"  time      : {result['timestamp']}")
        print(f"  url       : {config.url} (schema {config.schema})")

    async with HotelClient(config) as client:
        if args.ping:
            try:
                result["guest_count"] = await client.ping()
            except HotelError as exc:
                print(f"Connection check failed: {exc}", file=sys.stderr)
                raise SystemExit(1) from exc

        factories = {
            "rooms": client.rooms,
            "guests": client.guests,
            "bookings": client.bookings,
            "payments": client.payments,
        }
        for name in selected:
            result["collections"][name] = await dump_collection(name, factories[name](), json_mode=args.json_mode)

    payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"JSON written to {args.output}", file=sys.stderr)
    elif args.json_mode:
        print(payload)


if __name__ == "__main__":
    asyncio.run(main())
