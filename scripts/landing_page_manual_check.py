from __future__ import annotations

import argparse
import asyncio
import json
import os
from typing import Any

import httpx


async def _fetch_page(
    client: httpx.AsyncClient,
    doctor_id: str,
    quiz_type: str,
    *,
    regenerate: bool,
) -> dict[str, Any]:
    path = f"/api/v1/landing-pages/{doctor_id}/{quiz_type}"
    if regenerate:
        response = await client.post(f"{path}/retry")
    else:
        response = await client.get(path)
    if response.status_code >= 400:
        raise RuntimeError(f"Request failed: {response.status_code} {response.text}")
    return response.json()


def _print_view(view: dict[str, Any]) -> None:
    print(
        f"[landing-smoke] state={view['state']} attempt={view['attempt']} "
        f"source={view['source']} persisted={view['persisted']}"
    )
    if view.get("error"):
        print(f"[landing-smoke] Generation error: {view['error']}")
        if view.get("raw"):
            print("[landing-smoke] Raw completion preview:")
            print(view["raw"][:600], "...\n")
        return

    content = view["content"]
    print(f"[landing-smoke] Headline: {content['headline']}")
    print(f"[landing-smoke] Symptoms: {len(content['symptoms'])}, "
          f"comparison rows: {len(content['comparison_table'])}")
    print("[landing-smoke] Overviews:", json.dumps(content["overviews"], indent=2)[:600])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manual smoke-test the AI landing page generation workflow."
    )
    parser.add_argument("doctor_id", help="Identifier of an existing doctor profile.")
    parser.add_argument(
        "--quiz-type",
        default="NOSE",
        help="Quiz type to generate for (default: %(default)s).",
    )
    parser.add_argument(
        "--base-url",
        default=os.environ.get("CLINICLEADS_API_BASE_URL", "http://localhost:8000"),
        help="FastAPI base URL (default: %(default)s)",
    )
    parser.add_argument(
        "--regenerate",
        action="store_true",
        help="Call the retry endpoint so a new page is generated even if one is stored.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=120.0,
        help="Request timeout in seconds; generation can be slow (default: %(default)s).",
    )
    return parser


async def main_async(args: argparse.Namespace) -> None:
    base_url = args.base_url.rstrip("/")
    async with httpx.AsyncClient(base_url=base_url, timeout=httpx.Timeout(args.timeout)) as client:
        view = await _fetch_page(
            client, args.doctor_id, args.quiz_type, regenerate=args.regenerate
        )
        _print_view(view)

        colors = await client.get(
            f"/api/v1/landing-pages/{args.doctor_id}/{args.quiz_type}/colors"
        )
        colors.raise_for_status()
        print("[landing-smoke] Chatbot colors:", json.dumps(colors.json()))
        print("[landing-smoke] Done.")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        asyncio.run(main_async(args))
    except KeyboardInterrupt:  # pragma: no cover
        raise SystemExit(130)


if __name__ == "__main__":
    main()
