from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence, TextIO

from .settings import load_config
from .signing import SignAlgorithm, SignConfig, SignatureEngine

logger = logging.getLogger("paramsign.cli")

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

DEMO_PARAMS: dict[str, object] = {
    "user_id": 12345,
    "product_id": "67890",
    "amount": 99.99,
    "is_vip": True,
    "items": ["item1", "item2"],
    "timestamp": "1634567890",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sign and verify request parameters.")
    parser.add_argument("--secret", help="Shared secret (default: PARAMSIGN_SECRET).")
    parser.add_argument(
        "--algorithm",
        help=f"One of {', '.join(a.value for a in SignAlgorithm)} (default: PARAMSIGN_ALGORITHM).",
    )
    parser.add_argument("--signature-key", help="Name of the signature parameter.")
    parser.add_argument(
        "--ignore",
        action="append",
        default=None,
        metavar="KEY",
        help="Parameter excluded from signing; may be repeated.",
    )
    parser.add_argument(
        "--upper-case",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit upper-case (or, with --no-upper-case, lower-case) hex.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level.")

    subparsers = parser.add_subparsers(dest="command", required=True)
    sign_parser = subparsers.add_parser("sign", help="Print the signature of a JSON parameter object.")
    sign_parser.add_argument("--params", help="Path to a JSON object (default: stdin).")

    verify_parser = subparsers.add_parser("verify", help="Check a signature against a JSON parameter object.")
    verify_parser.add_argument("--params", help="Path to a JSON object (default: stdin).")
    verify_parser.add_argument(
        "--signature",
        help="Signature to check; defaults to the signature parameter inside the object.",
    )

    subparsers.add_parser("demo", help="Sign sample parameters, verify them, then tamper and verify again.")
    return parser


def _config_from_args(args: argparse.Namespace) -> SignConfig:
    config = load_config()
    overrides: dict[str, object] = {}
    if args.secret is not None:
        overrides["secret"] = args.secret
    if args.algorithm is not None:
        overrides["algorithm"] = args.algorithm
    if args.signature_key is not None:
        overrides["signature_key"] = args.signature_key
    if args.ignore is not None:
        overrides["ignored_keys"] = tuple(args.ignore)
    if args.upper_case is not None:
        overrides["upper_case"] = args.upper_case
    return replace(config, **overrides)


def _read_params(path: str | None, stdin: TextIO) -> dict[str, object]:
    raw = Path(path).read_text(encoding="utf-8") if path else stdin.read()
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("parameters must be a JSON object")
    return data


def _run_demo(engine: SignatureEngine, out: TextIO) -> int:
    params = dict(DEMO_PARAMS)
    signature = engine.generate_signature(params)
    print(f"signature: {signature}", file=out)

    params[engine.signature_key] = signature
    valid = engine.validate_with_signature_in_params(params)
    print(f"verify original: {'valid' if valid else 'invalid'}", file=out)

    params["amount"] = 100.00
    tampered = engine.validate_with_signature_in_params(params)
    print(f"verify tampered: {'valid' if tampered else 'invalid'}", file=out)
    return EXIT_VALID if valid and not tampered else EXIT_INVALID


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    engine = SignatureEngine(_config_from_args(args))

    try:
        if args.command == "demo":
            return _run_demo(engine, stdout)
        params = _read_params(args.params, stdin)
        if args.command == "sign":
            print(engine.generate_signature(params), file=stdout)
            return EXIT_VALID
        if args.signature is None:
            valid = engine.validate_with_signature_in_params(params)
        else:
            valid = engine.validate(params, args.signature)
    except (ValueError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print("valid" if valid else "invalid", file=stdout)
    return EXIT_VALID if valid else EXIT_INVALID


if __name__ == "__main__":
    raise SystemExit(main())
