"""Command-line interface for ingressgen."""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .builder import build_ingresses
from .config import DEFAULT_CONFIG_FILE, apply_overrides, load_config
from .errors import IngressgenError
from .logging_config import get_logger, log_function_entry, log_function_exit, setup_logging
from .render import API_VERSIONS, NETWORKING_V1, OUTPUT_FORMATS, dump, render_list

logger = get_logger(__name__)


def generate(args: argparse.Namespace) -> str:
    """Load the configuration, build the ingresses and serialize them."""
    log_function_entry(logger, "generate", file=args.file, api_version=args.api_version, output=args.output)

    config = load_config(args.file)
    config = apply_overrides(
        config,
        name=args.name,
        namespace=args.namespace,
        ingress_class=args.ingress_class,
    )

    resources = build_ingresses(config)
    document = render_list(resources, args.api_version)

    log_function_exit(logger, "generate", items_count=len(document["items"]))
    return dump(document, args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ingressgen",
        description="ingressgen: Generate Kubernetes Ingress manifests from a host/service mapping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-file", "--file",
        default=DEFAULT_CONFIG_FILE,
        help=f"Input file (default: {DEFAULT_CONFIG_FILE})"
    )
    parser.add_argument(
        "-name", "--name",
        default="",
        help="Override ingress name"
    )
    parser.add_argument(
        "-namespace", "--namespace",
        default="",
        help="Override namespace"
    )
    parser.add_argument(
        "-ingress-class", "--ingress-class",
        default="",
        help="Override ingress class"
    )
    parser.add_argument(
        "--api-version",
        choices=API_VERSIONS,
        default=NETWORKING_V1,
        help=f"Ingress API version to emit (default: {NETWORKING_V1})"
    )
    parser.add_argument(
        "--output", "-o",
        choices=OUTPUT_FORMATS,
        default="json",
        help="Output format (default: json)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        output = generate(args)
    except IngressgenError as e:
        logger.error("Failed to generate ingress manifests", error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.stdout.write(output)


if __name__ == "__main__":
    main()
