"""vitalscore MCP Server: application factory.

This module provides:
- create_app() for testability (tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from vitalscore.core.config.settings import get_settings
from vitalscore.domains.health.connectors import HealthReadingsProvider
from vitalscore.domains.health.connectors.providers import MockHealthReadingsProvider
from vitalscore.domains.health.domain_logic.vital_models import EvaluatorConfig
from vitalscore.domains.health.prompts.health_prompts import register_health_prompts
from vitalscore.domains.health.tools.vital_tools import register_vital_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "vitalscore"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    readings_provider_override: HealthReadingsProvider | None = None,
    config_override: EvaluatorConfig | None = None,
) -> FastMCP:
    """Create and configure the vitalscore MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Builds the evaluator config from settings
    3. Initializes the health readings provider (mock unless overridden)
    4. Registers all tools and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Vital sign evaluation server. Classifies heart rate, steps, sleep, "
            "water, temperature, oxygen saturation, blood pressure and weight "
            "readings and computes a 0-100 wellness score with a breakdown."
        ),
    )

    # --- Evaluator config ---
    if config_override is not None:
        config = config_override
    else:
        config = EvaluatorConfig.from_settings(settings)
    logger.info(
        "Evaluator defaults: steps goal=%g, water goal=%gL",
        config.default_steps_goal,
        config.default_water_goal,
    )

    # --- Initialize health readings provider ---
    if readings_provider_override is not None:
        readings_provider = readings_provider_override
    else:
        readings_provider = MockHealthReadingsProvider()
        logger.info("Using mock health readings provider")

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "data_source": readings_provider.data_source,
            "default_steps_goal": config.default_steps_goal,
            "default_water_goal": config.default_water_goal,
        }

    register_vital_tools(server, readings_provider, config)
    logger.info("Vital evaluation tools registered")

    # --- Register prompts ---
    register_health_prompts(server)

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
