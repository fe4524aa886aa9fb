"""vitalscore server entry point: ``python -m vitalscore.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from vitalscore.core.config.settings import get_settings
from vitalscore.core.server.app import create_app


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Start the vitalscore MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.vitalscore_log_level.upper(), logging.INFO)
    )

    logger = logging.getLogger(__name__)
    if not settings.vitalscore_allow_insecure_bind and not _is_loopback_host(
        settings.vitalscore_host
    ):
        raise RuntimeError(
            "Refusing to bind vitalscore to a non-loopback host without an auth layer. "
            "Set VITALSCORE_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    logger.info(
        "Starting vitalscore server on %s:%d",
        settings.vitalscore_host,
        settings.vitalscore_port,
    )
    logger.info(
        "Default goals: %g steps, %g L water",
        settings.default_steps_goal,
        settings.default_water_goal,
    )

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.vitalscore_host,
        port=settings.vitalscore_port,
    )


if __name__ == "__main__":
    run()
