"""Command line entry point: airdrop-deploy."""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .commands import CommandOptions, build, deploy, load_configuration, set_allowance
from .constants import DEFAULT_RECEIPT_TIMEOUT
from .exceptions import (
    DeployerError,
    InvalidConfigurationError,
    MissingRequiredValueError,
    StepOrderError,
)
from .plans import PLANS
from .store import ConfigStore

logger = logging.getLogger("airdrop_deployments")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

EXIT_FAILURE = 1
EXIT_INVALID_CONFIG = 2


def configure_logging(verbose: bool = False) -> None:
    """Send package log records to stdout."""
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def _options(args: argparse.Namespace) -> CommandOptions:
    return CommandOptions(
        prompt=None if args.non_interactive else input,
        artifacts_dir=args.artifacts_dir,
        project_dir=args.project_dir,
        build=getattr(args, "build", False),
        verify=getattr(args, "verify", False),
        receipt_timeout=getattr(args, "receipt_timeout", None),
    )


def cmd_deploy(args: argparse.Namespace) -> int:
    options = _options(args)
    store = ConfigStore(args.config_file)
    record = load_configuration(store, args.config, options.prompt)
    results = deploy(PLANS[args.cmd], record, store, options)
    for result in results.values():
        print(f"{result.step}: {result.address}")
    return 0


def cmd_set_allowance(args: argparse.Namespace) -> int:
    options = _options(args)
    store = ConfigStore(args.config_file)
    record = load_configuration(store, args.config, options.prompt)
    tx_hash = set_allowance(record, store, options)
    print(f"Allowance transaction: {tx_hash}")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    print(build(_options(args)))
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Load configuration from prior runs (asked interactively when omitted)",
    )
    parser.add_argument("--config-file", help="Configuration file (default script/.deploy-config.json)")
    parser.add_argument("--artifacts-dir", help="Build output directory (default out)")
    parser.add_argument("--project-dir", help="Directory to run forge in (default current directory)")
    parser.add_argument(
        "--non-interactive",
        action="store_true",
        help="Never prompt; use environment variables, cached values and defaults only",
    )
    parser.add_argument(
        "--receipt-timeout",
        type=float,
        default=DEFAULT_RECEIPT_TIMEOUT,
        help=f"Seconds to wait for each transaction receipt (default {DEFAULT_RECEIPT_TIMEOUT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airdrop-deploy",
        description="Interactively deploys the WorldID airdrop contracts.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    for plan in PLANS.values():
        p_plan = sub.add_parser(plan.name, help=plan.description, description=plan.description)
        _add_common_arguments(p_plan)
        p_plan.add_argument("--build", action="store_true", help="Run forge build before deploying")
        p_plan.add_argument(
            "--verify",
            action="store_true",
            help="Verify newly deployed contracts on Etherscan",
        )
        p_plan.set_defaults(func=cmd_deploy)

    p_allowance = sub.add_parser(
        "set-allowance",
        help="Sets ERC20 token allowance of the holder address to the specified amount.",
    )
    _add_common_arguments(p_allowance)
    p_allowance.set_defaults(func=cmd_set_allowance)

    p_build = sub.add_parser("build", help="Compile the contracts with forge")
    p_build.add_argument("--project-dir", help="Directory to run forge in (default current directory)")
    p_build.add_argument("--artifacts-dir", help=argparse.SUPPRESS)
    p_build.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p_build.set_defaults(func=cmd_build, non_interactive=True)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return args.func(args)
    except DeployerError as e:
        if e.step:
            logger.error("Deployment of %s has failed: %s", e.step, e)
        else:
            logger.error("%s", e)
        if isinstance(e, (MissingRequiredValueError, InvalidConfigurationError, StepOrderError)):
            return EXIT_INVALID_CONFIG
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
