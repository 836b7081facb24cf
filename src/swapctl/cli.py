import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

import httpx

from imgswap.classifier import ImageReplacer
from imgswap.config import load_config
from imgswap.decisions import classify
from imgswap.errors import ConfigError

HEALTH_TIMEOUT_S = 5
CLASSIFY_TIMEOUT_S = 30


def emit(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=True, sort_keys=True), file=sys.stdout)


def _error(message: str) -> int:
    emit({"status": "error", "error": message})
    return 1


def _call_service(method: str, url: str, timeout: float, payload: Optional[dict] = None) -> int:
    try:
        with httpx.Client(timeout=timeout) as client:
            resp = client.request(method, url, json=payload)
            resp.raise_for_status()
            body = resp.json()
    except httpx.HTTPError as exc:
        return _error(f"{method} {url} failed: {exc}")
    except ValueError as exc:
        return _error(f"{method} {url} returned invalid JSON: {exc}")
    emit(body)
    return 0


def health(base_url: str) -> int:
    return _call_service("GET", f"{base_url}/health", HEALTH_TIMEOUT_S)


def _load_payload(file: Optional[str], inline: Optional[str]) -> dict:
    if file:
        return json.loads(Path(file).read_text(encoding="utf-8"))
    return json.loads(inline or "")


def classify_remote(base_url: str, payload: dict) -> int:
    return _call_service("POST", f"{base_url}/v1/classify", CLASSIFY_TIMEOUT_S, payload)


def inspect_local(config_path: Optional[str], urls: list[str]) -> int:
    try:
        settings = load_config(config_path)
    except ConfigError as exc:
        return _error(str(exc))
    replacer = ImageReplacer.from_settings(settings)
    emit(classify(replacer, urls).model_dump())
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="swapctl")
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:7600",
        help="Base URL for the imgswap service",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Check service health")
    classify_parser = subparsers.add_parser("classify", help="Classify urls via the service")
    classify_parser.add_argument("--file", help="Path to JSON request body")
    classify_parser.add_argument("--json", help="Inline JSON request body")
    inspect_parser = subparsers.add_parser("inspect", help="Classify urls locally")
    inspect_parser.add_argument("--config", help="Path to YAML config")
    inspect_parser.add_argument("urls", nargs="+", help="Image urls to classify")

    args = parser.parse_args(argv)

    if args.command == "health":
        raise SystemExit(health(args.base_url))
    if args.command == "inspect":
        raise SystemExit(inspect_local(args.config, args.urls))
    if args.command == "classify":
        if not args.file and not args.json:
            raise SystemExit(_error("Provide --file or --json"))
        try:
            payload = _load_payload(args.file, args.json)
        except (OSError, ValueError) as exc:
            raise SystemExit(_error(f"Invalid JSON: {exc}"))
        raise SystemExit(classify_remote(args.base_url, payload))


if __name__ == "__main__":
    main()
