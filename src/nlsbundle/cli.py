"""Command-line interface for nls bundles.

Usage:
    nlsbundle check nls/messages.js
    nlsbundle resolve service:id:added-member alice admins --locale fr
    nlsbundle keys --locale fr --source nls/messages.js
    nlsbundle format nls/messages.js --check

Without --source, resolve and keys use the shipped identity catalog.

Exit Codes:
    0   Success
    1   Validation failed, key not found, or module needs formatting
    2   File read error or malformed module

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from nlsbundle.catalogs import load_identity_registry
from nlsbundle.constants import ROOT_LOCALE
from nlsbundle.diagnostics import (
    DiagnosticFormatter,
    KeyNotFoundError,
    NlsError,
    OutputFormat,
    PlaceholderIndexOutOfRangeError,
)
from nlsbundle.enums import PlaceholderPolicy
from nlsbundle.locale_utils import get_system_locale
from nlsbundle.localization.loading import PathResourceLoader
from nlsbundle.runtime import BundleRegistry, RegistryConfig
from nlsbundle.syntax import NlsModuleParser, serialize_nls_module
from nlsbundle.validation import validate_definition

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def _loader_for(path: Path) -> PathResourceLoader:
    """Loader for the nls directory holding a master module at path."""
    directory = path.parent.resolve()
    return PathResourceLoader(f"{directory.as_posix()}/{{locale}}", root_dir=str(directory))


def _config_from(args: argparse.Namespace) -> RegistryConfig:
    return RegistryConfig(
        placeholder_policy=getattr(args, "policy", PlaceholderPolicy.KEEP),
        validate_locales=not args.no_validate_locales,
    )


def _build_registry(args: argparse.Namespace) -> BundleRegistry:
    config = _config_from(args)
    if args.source is None:
        return load_identity_registry(config)
    path: Path = args.source
    parser = NlsModuleParser(max_source_size=config.max_source_size)
    module = parser.parse(path.read_text(encoding="utf-8"), source_path=str(path))
    return BundleRegistry.from_definition(
        module, _loader_for(path), config=config, resource_id=path.name
    )


def _print_error(error: NlsError, output_format: OutputFormat) -> None:
    if error.diagnostic is not None:
        formatter = DiagnosticFormatter(output_format=output_format)
        print(formatter.format(error.diagnostic), file=sys.stderr)
    else:
        print(f"[ERROR] {error}", file=sys.stderr)


def _cmd_check(args: argparse.Namespace) -> int:
    path: Path = args.source
    source = path.read_text(encoding="utf-8")
    result = validate_definition(
        source,
        _loader_for(path),
        config=_config_from(args),
        resource_id=path.name,
        source_path=str(path),
    )
    formatter = DiagnosticFormatter(output_format=args.format)
    print(formatter.format_validation_result(result))
    if not result.is_valid or (args.strict and result.warning_count):
        return 1
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    registry = _build_registry(args)
    print(registry.resolve(args.locale, args.key, args.args))
    return 0


def _cmd_keys(args: argparse.Namespace) -> int:
    registry = _build_registry(args)
    for key in sorted(registry.keys(args.locale)):
        print(key)
    return 0


def _cmd_format(args: argparse.Namespace) -> int:
    path: Path = args.source
    source = path.read_text(encoding="utf-8")
    module = NlsModuleParser().parse(source, source_path=str(path))
    formatted = serialize_nls_module(module, indent=args.indent)
    if args.check:
        if formatted != source:
            print(f"{path}: would reformat", file=sys.stderr)
            return 1
        return 0
    if args.write:
        path.write_text(formatted, encoding="utf-8")
        logger.info("Reformatted %s", path)
    else:
        sys.stdout.write(formatted)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="nlsbundle",
        description="Inspect, validate and resolve RequireJS nls message bundles.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a master module and its translations:
  nlsbundle check webjars/service/id/nls/messages.js

  # Resolve a message with positional arguments:
  nlsbundle resolve service:id:added-member alice admins --locale fr
""",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log loading and resolution details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Validate a master module and its locales")
    check.add_argument("source", type=Path, help="Master module (nls/messages.js)")
    check.add_argument(
        "--format",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=OutputFormat.RUST,
        help="Output format (default: rust)",
    )
    check.add_argument("--strict", action="store_true", help="Treat warnings as failures")
    check.set_defaults(handler=_cmd_check)

    resolve = subparsers.add_parser("resolve", help="Resolve a message key")
    resolve.add_argument("key", help="Message key")
    resolve.add_argument("args", nargs="*", help="Positional placeholder arguments")
    resolve.add_argument(
        "--policy",
        type=PlaceholderPolicy,
        choices=list(PlaceholderPolicy),
        default=PlaceholderPolicy.KEEP,
        help="Handling of placeholders without an argument (default: keep)",
    )
    resolve.set_defaults(handler=_cmd_resolve)

    keys = subparsers.add_parser("keys", help="List the keys resolvable for a locale")
    keys.set_defaults(handler=_cmd_keys)

    for sub, default_locale in ((resolve, None), (keys, ROOT_LOCALE)):
        sub.add_argument(
            "--locale",
            "-l",
            default=default_locale,
            help="Locale tag (resolve default: system locale; keys default: root)",
        )
        sub.add_argument(
            "--source",
            "-s",
            type=Path,
            default=None,
            help="Master module to load (default: shipped identity catalog)",
        )

    fmt = subparsers.add_parser("format", help="Rewrite a module in canonical form")
    fmt.add_argument("source", type=Path, help="Module file")
    fmt.add_argument("--indent", default="\t", help="Indentation unit (default: tab)")
    mode = fmt.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="Exit 1 if the file would change")
    mode.add_argument("--write", "-w", action="store_true", help="Rewrite the file in place")
    fmt.set_defaults(handler=_cmd_format)

    for sub in (check, resolve, keys):
        sub.add_argument(
            "--no-validate-locales",
            action="store_true",
            help="Accept locale tags unknown to CLDR",
        )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if getattr(args, "locale", ROOT_LOCALE) is None:
        args.locale = get_system_locale()

    output_format = getattr(args, "format", OutputFormat.SIMPLE)
    try:
        return args.handler(args)
    except (KeyNotFoundError, PlaceholderIndexOutOfRangeError) as e:
        _print_error(e, output_format)
        return 1
    except NlsError as e:
        _print_error(e, output_format)
        return 2
    except OSError as e:
        print(f"[ERROR] Cannot read file: {e}", file=sys.stderr)
        return 2
    except UnicodeDecodeError as e:
        print(f"[ERROR] File is not valid UTF-8: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
