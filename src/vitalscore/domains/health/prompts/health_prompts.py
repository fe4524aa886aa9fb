"""MCP Prompts: pre-built interaction templates for vitals user journeys."""

from __future__ import annotations

from fastmcp import FastMCP


def register_health_prompts(mcp: FastMCP) -> None:
    """Register health domain MCP prompts."""

    @mcp.prompt()
    def wellness_score_prompt() -> str:
        """Prompt template explaining the current wellness score."""
        return """Why is my wellness score what it is today? Please:

1. Call the wellness_score tool for my latest readings
2. Walk me through which vitals earned full points and which lost points
3. Point out any vitals that could not be read and were left out
4. Suggest one or two realistic changes for tomorrow

Keep it short and encouraging. This is not medical advice."""

    @mcp.prompt()
    def vital_review_prompt(metric: str = "heartRate") -> str:
        """Prompt template for reviewing a single vital."""
        return f"""Let's look at my {metric} reading. I'd like to:

1. See its current status label and what range it falls in
2. Understand what that range usually means
3. Know when a reading like this is worth discussing with a doctor

Please use the vital_status tool and keep the explanation in plain language."""
