"""DDNS CLI — command-line interface for content-hash updates.

Usage:
    ddns update --name example.eth --content-hash Qm... --dry-run
    ddns encode QmQYE8p9oRPs9nzS1tsrzNsZWmrkVmRqKvMqEXpx2HQgdp
    ddns decode 0xe3010170122029f2...
    ddns classify example.crypto

``update`` reads its inputs from the environment (see ddns.config);
flags override them.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace

from ddns import codec
from ddns.config import UpdateSettings
from ddns.errors import DdnsError
from ddns.models.registry import ContentType, family_spec
from ddns.observability import configure_logging
from ddns.registry.classifier import classify
from ddns.service import DdnsService


def _fail(exc: Exception) -> int:
    print(f"Failed: {exc}", file=sys.stderr)
    return 1


def cmd_update(args: argparse.Namespace) -> int:
    try:
        env = UpdateSettings.from_env()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    settings = replace(
        env,
        secret=args.mnemonic or env.secret,
        rpc_url=args.rpc or env.rpc_url,
        name=args.name or env.name,
        content_hash=args.content_hash or env.content_hash,
        content_type=args.content_type or env.content_type,
        dry_run=args.dry_run or env.dry_run,
        verbose=args.verbose or env.verbose,
        tx_timeout=args.timeout or env.tx_timeout,
    )

    configure_logging(verbose=settings.verbose, json_output=args.json_logs)

    missing = settings.missing()
    if missing:
        print(f"Missing required input: {', '.join(missing)}", file=sys.stderr)
        return 2

    service = DdnsService(tx_timeout=settings.tx_timeout)
    try:
        result = service.update(
            settings.secret,
            settings.rpc_url,
            settings.name,
            settings.content_hash,
            settings.content_type,
            settings.dry_run,
        )
    except DdnsError as exc:
        return _fail(exc)
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def cmd_encode(args: argparse.Namespace) -> int:
    try:
        record = codec.encode(args.hash, args.content_type)
    except DdnsError as exc:
        return _fail(exc)
    print("0x" + record.hex())
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    try:
        value, tag = codec.decode(args.record)
    except DdnsError as exc:
        return _fail(exc)
    print(f"{tag.value} {value}")
    return 0


def cmd_classify(args: argparse.Namespace) -> int:
    try:
        family = classify(args.name)
    except DdnsError as exc:
        return _fail(exc)
    types = sorted(t.value for t in family_spec(family).content_types)
    print(f"{family.value} {','.join(types)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ddns",
        description="Update the content hash of ENS, CNS and UNS names",
    )
    sub = parser.add_subparsers(dest="command")
    content_types = [t.value for t in ContentType]

    # update
    p_update = sub.add_parser("update", help="Set the content hash of a name")
    p_update.add_argument("--mnemonic", help="Mnemonic phrase or private key (default: INPUT_MNEMONIC)")
    p_update.add_argument("--rpc", help="RPC endpoint URL (default: INPUT_RPC)")
    p_update.add_argument("--name", help="Domain name, e.g. example.eth (default: INPUT_NAME)")
    p_update.add_argument("--content-hash", help="Content hash (default: INPUT_CONTENTHASH)")
    p_update.add_argument("--content-type", choices=content_types, help="Content type (default: ipfs-ns)")
    p_update.add_argument("--dry-run", action="store_true", help="Validate and plan without sending")
    p_update.add_argument("--verbose", action="store_true", help="Debug logging")
    p_update.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    p_update.add_argument("--timeout", type=float, help="Confirmation timeout in seconds")

    # encode
    p_encode = sub.add_parser("encode", help="Encode a content hash record")
    p_encode.add_argument("hash", help="IPFS CID or Swarm hash")
    p_encode.add_argument("--content-type", choices=content_types, default=ContentType.IPFS.value)

    # decode
    p_decode = sub.add_parser("decode", help="Decode a content hash record")
    p_decode.add_argument("record", help="Hex-encoded record")

    # classify
    p_classify = sub.add_parser("classify", help="Show the registry family of a name")
    p_classify.add_argument("name", help="Domain name")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "update": cmd_update,
        "encode": cmd_encode,
        "decode": cmd_decode,
        "classify": cmd_classify,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
