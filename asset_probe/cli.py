"""
Command-line interface entry points for asset_probe
"""

import sys
import os
import argparse
import logging

from .probe import ApiProbe, DEFAULT_URL
from .client import AssetApiClient, DEFAULT_BASE_URL
from .checks import StatsCheck, HierarchyCheck


def _add_common_arguments(parser):
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )


def _add_auth_arguments(parser):
    parser.add_argument(
        "--base-url",
        default=os.environ.get("ASSET_API_BASE_URL", DEFAULT_BASE_URL),
        help=f"API base URL (default: {DEFAULT_BASE_URL})"
    )
    parser.add_argument(
        "--email",
        default=os.environ.get("ASSET_API_EMAIL", "scy@expo.com"),
        help="Login email or username"
    )
    parser.add_argument(
        "--password",
        default=os.environ.get("ASSET_API_PASSWORD", "admin123"),
        help="Login password"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=os.environ.get("ASSET_API_TIMEOUT") or "30",
        help="Per-request timeout in seconds (default: 30)"
    )
    _add_common_arguments(parser)


def _run(func):
    try:
        sys.exit(func())
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def probe_api(argv=None):
    """Entry point for 'probe_api' command"""
    parser = argparse.ArgumentParser(
        description="GET one API endpoint and print its status and the start of its body",
        prog="probe_api"
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("ASSET_API_URL", DEFAULT_URL),
        help=f"URL to probe (default: {DEFAULT_URL})"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=os.environ.get("ASSET_API_TIMEOUT") or None,
        help="Timeout in seconds (default: wait indefinitely)"
    )
    _add_common_arguments(parser)

    args = parser.parse_args(argv)

    probe = ApiProbe(url=args.url, timeout=args.timeout)

    # Must follow construction; basicConfig in the constructor sets the root level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    _run(probe.run)


def check_stats(argv=None):
    """Entry point for 'check_stats' command"""
    parser = argparse.ArgumentParser(
        description="Log in and fetch asset-category stats",
        prog="check_stats"
    )
    _add_auth_arguments(parser)

    args = parser.parse_args(argv)

    with AssetApiClient(base_url=args.base_url, timeout=args.timeout) as client:
        check = StatsCheck(client, args.email, args.password)
        if args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        _run(check.run)


def check_hierarchy(argv=None):
    """Entry point for 'check_hierarchy' command"""
    parser = argparse.ArgumentParser(
        description="Create a category > type > product > child product chain",
        prog="check_hierarchy"
    )
    _add_auth_arguments(parser)
    parser.add_argument("--category", default="Test Category", help="Category name to create")
    parser.add_argument("--type", dest="type_name", default="Test Type", help="Type name to add")
    parser.add_argument("--product", default="Test Product", help="Product name to add")
    parser.add_argument("--child", default="Test Child Product", help="Child product name to add")

    args = parser.parse_args(argv)

    with AssetApiClient(base_url=args.base_url, timeout=args.timeout) as client:
        check = HierarchyCheck(
            client, args.email, args.password,
            category_name=args.category,
            type_name=args.type_name,
            product_name=args.product,
            child_name=args.child
        )
        if args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        _run(check.run)
