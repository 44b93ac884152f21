"""Command line entry point: load config, register resources and run one check."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence

from healthmon.config import AppSettings, ConfigError, load_config
from healthmon.monitor import HealthMonitor
from healthmon.observability.logging import bootstrap_logging_from_app_settings

logger = logging.getLogger(__name__)

EXIT_HEALTHY = 0
EXIT_UNHEALTHY = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="healthmon",
        description="Check the health of the resources declared in appsettings.json",
    )
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory holding appsettings.json (default: ./config)",
    )
    parser.add_argument(
        "--env",
        default=None,
        help="Environment overlay to apply (default: $HEALTHMON_ENV or development)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Override the shared check deadline in seconds",
    )
    parser.add_argument(
        "--synthetic",
        action="store_true",
        help="Use synthetic probers instead of contacting the resources",
    )
    return parser


def build_monitor(
    app_settings: AppSettings,
    *,
    timeout_seconds: float | None = None,
    synthetic: bool = False,
) -> HealthMonitor:
    """Create a monitor from settings and register every configured resource."""
    overrides: dict[str, object] = {}
    if timeout_seconds is not None:
        overrides["timeout_seconds"] = timeout_seconds
    if synthetic:
        overrides["probe_mode"] = "synthetic"
    settings = app_settings.monitor.model_copy(update=overrides) if overrides else app_settings.monitor

    monitor = HealthMonitor(settings=settings)
    for resource_settings in app_settings.resources:
        accepted, error = monitor.register(resource_settings.to_resource())
        if not accepted:
            logger.warning("Skipping resource %s: %s", resource_settings.name, error)
    return monitor


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.timeout is not None and args.timeout <= 0:
        print("error: --timeout must be > 0", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        app_settings = load_config(config_dir=args.config_dir, env=args.env)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    bootstrap_logging_from_app_settings(app_settings, env=args.env, stream=sys.stderr)
    monitor = build_monitor(app_settings, timeout_seconds=args.timeout, synthetic=args.synthetic)

    response = asyncio.run(monitor.check())
    print(json.dumps(response.to_dict(), indent=2))
    return EXIT_HEALTHY if response.ok else EXIT_UNHEALTHY
