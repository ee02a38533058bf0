"""Command-line entry points: create-volume and create-bucket."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as get_version
from typing import Callable, Optional, Sequence, TextIO

from storage_provisioner.errors import ArityError, ConfigurationError, GrantFormatError, ProvisioningError
from storage_provisioner.logging_config import ensure_logging
from storage_provisioner.services.argument_classifier import ResourceKind, classify_arguments
from storage_provisioner.services.config_resolver import resolve_classified
from storage_provisioner.services.dependencies import get_provisioning_service
from storage_provisioner.services.provisioning_service import ProvisioningService


logger = logging.getLogger(__name__)

_PROGRAMS = {
    ResourceKind.VOLUME: "create-volume",
    ResourceKind.BUCKET: "create-bucket",
}

_USAGE = {
    ResourceKind.VOLUME: "<volume name> [<quota> <owner> <acl>]",
    ResourceKind.BUCKET: "<volume name> <bucket name> [<storage type> <versioning> <acl>]",
}

_EXAMPLES = {
    ResourceKind.VOLUME: (
        "foo",
        'foo "50 GB"',
        'foo "50 GB" "dr.strange"',
        'foo "50 GB" "dr.strange" "user:dr.who:rw"',
    ),
    ResourceKind.BUCKET: (
        "foo bar",
        "foo bar SSD",
        "foo bar SSD true",
        "foo bar SSD true user:dr.who:rw",
    ),
}


def _usage_text(kind: ResourceKind) -> str:
    prog = _PROGRAMS[kind]
    lines = [f"Usage: {prog} {_USAGE[kind]}", "Examples: "]
    lines.extend(f"{prog} {example}" for example in _EXAMPLES[kind])
    return "\n".join(lines)


def print_usage(kind: ResourceKind, file: TextIO = sys.stderr) -> None:
    print(_usage_text(kind), file=file)


def _invalid_argument(kind: ResourceKind) -> int:
    print("Invalid argument.", file=sys.stderr)
    print_usage(kind)
    return 1


def _package_version() -> str:
    try:
        return get_version("storage-provisioner")
    except PackageNotFoundError:
        return "dev"


def _build_parser(kind: ResourceKind) -> argparse.ArgumentParser:
    prog = _PROGRAMS[kind]
    parser = argparse.ArgumentParser(
        prog=prog,
        usage=f"{prog} [--verbose] {_USAGE[kind]}",
        description=f"Create an object-store {kind.value}. Optional settings are positional: "
        "each one requires the ones before it.",
        epilog="Examples:\n" + "\n".join(f"  {prog} {example}" for example in _EXAMPLES[kind]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        exit_on_error=False,
    )
    parser.add_argument("--version", action="version", version=f"{prog} {_package_version()}")
    parser.add_argument("--verbose", action="store_true", help="Log debug output.")
    # Flags must come first; everything from the first positional on is taken verbatim,
    # so values such as an owner "-bob" are not mistaken for options.
    parser.add_argument("arguments", nargs=argparse.REMAINDER, metavar="ARG", help=argparse.SUPPRESS)
    return parser


def run(
    kind: ResourceKind,
    argv: Optional[Sequence[str]] = None,
    *,
    service_factory: Callable[[], ProvisioningService] = get_provisioning_service,
) -> int:
    """Parse `argv`, resolve the creation request and provision it.

    Returns the process exit code: 0 on success, 1 on a wrong argument count
    (usage is printed to stderr) or on any configuration, ACL or provisioning
    failure (its message is logged).
    """

    parser = _build_parser(kind)
    try:
        options, unrecognized = parser.parse_known_args(argv)
    except argparse.ArgumentError:
        return _invalid_argument(kind)
    if unrecognized:
        # A dash-prefixed first token; "--" must precede it.
        return _invalid_argument(kind)

    ensure_logging(logging.DEBUG if options.verbose else logging.INFO)

    tokens = list(options.arguments)
    if tokens[:1] == ["--"]:
        tokens = tokens[1:]

    try:
        classified = classify_arguments(tokens, kind)
    except ArityError:
        return _invalid_argument(kind)

    try:
        identity, resolved = resolve_classified(classified)
        service = service_factory()
        asyncio.run(service.provision(identity, resolved))
    except (ConfigurationError, GrantFormatError, ProvisioningError) as exc:
        logger.error("%s", exc)
        return 1
    except ValueError as exc:
        # Missing or invalid OBJECT_STORE_* environment.
        logger.error("%s", exc)
        return 1

    return 0


def create_volume_main(argv: Optional[Sequence[str]] = None) -> int:
    return run(ResourceKind.VOLUME, argv)


def create_bucket_main(argv: Optional[Sequence[str]] = None) -> int:
    return run(ResourceKind.BUCKET, argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Dispatch ``volume ...`` / ``bucket ...`` to the matching entry point."""

    args = list(sys.argv[1:] if argv is None else argv)
    commands = {kind.value: kind for kind in ResourceKind}
    if not args or args[0] not in commands:
        print(f"Usage: storage-provisioner {{{','.join(commands)}}} ARG...", file=sys.stderr)
        return 1
    return run(commands[args[0]], args[1:])
