"""Entry point for running the DevOps Assistant.

Handles:
- Configuration loading (a missing API credential stops startup here)
- Logging setup with secret sanitization
- Health check and dry-run modes
- Serving the web application
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from devops_assistant._version import __version__

log = structlog.get_logger()


def setup_logging(debug: bool = False, log_format: str = "console") -> None:
    """Configure structured logging before the config file is read.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from devops_assistant.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.INFO
    configure_logging(level=level, log_format=LogFormat(log_format.lower()))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="devops-assistant",
        description="DevOps Assistant - syntax checker and best-practice tutor for DevOps files",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to configuration file (default: config/config.yaml)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse config and validate without starting the server",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and exit",
    )

    parser.add_argument("--host", help="Override server.host from the config file")
    parser.add_argument("--port", type=int, help="Override server.port from the config file")

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Run the DevOps Assistant.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    log.info("starting_devops_assistant", version=__version__, config_path=str(args.config))

    try:
        from devops_assistant.config.loader import load_config

        log.info("loading_configuration", path=str(args.config))
        config = load_config(args.config)
        log.info("configuration_loaded", provider=config.llm.provider)
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(args.config), error=str(e))
        return 1
    except ValueError as e:
        log.error("configuration_invalid", error=str(e))
        return 1

    from devops_assistant.utils.logging import configure_from_config

    configure_from_config(config.logging, debug=args.debug)

    if args.dry_run:
        log.info("dry_run_mode_config_valid")
        return 0

    if args.health_check:
        from devops_assistant.utils.health import HealthChecker

        report = asyncio.run(HealthChecker(config).run_all_checks())
        if report.healthy:
            log.info("health_check_passed", details=report.details)
            return 0
        log.error("health_check_failed", details=report.details)
        return 1

    import uvicorn

    from devops_assistant.web.app import create_app

    try:
        app = create_app(config)
    except Exception as e:
        log.exception("fatal_error", error=str(e))
        return 1

    host = args.host or config.server.host
    port = args.port or config.server.port
    log.info("serving", host=host, port=port)
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.format)

    try:
        return run(args)
    except KeyboardInterrupt:
        log.info("shutting_down_gracefully")
        return 0


if __name__ == "__main__":
    sys.exit(main())
