"""Health check utilities for TaskPilot providers."""

from datetime import datetime, timezone
from typing import Any

from loguru import logger

from taskpilot.core.config import Settings
from taskpilot.providers.registry import ProviderRegistry, ProviderType


class HealthChecker:
    """
    Provider health checker.

    Verifies that provider credentials are configured and that the
    configured providers answer a liveness probe.

    Example:
        >>> checker = HealthChecker(ProviderRegistry())
        >>> health = await checker.check_all()
        >>> health["status"]
        'healthy'
    """

    def __init__(self, registry: ProviderRegistry, settings: Settings | None = None) -> None:
        """Initialize the health checker."""
        self.registry = registry
        self.settings = settings or registry.settings

    async def check_credentials(self) -> dict[str, Any]:
        """
        Check which providers have an API key configured.

        Returns:
            Health check result.
        """
        configured = [
            ptype.value
            for ptype in ProviderType
            if self.settings.provider_credentials(ptype.value)["api_key"]
        ]

        if not configured:
            return {
                "name": "credentials",
                "status": "unhealthy",
                "message": "No provider API keys configured",
                "details": {"configured": []},
            }

        missing = [p.value for p in ProviderType if p.value not in configured]
        return {
            "name": "credentials",
            "status": "healthy" if not missing else "degraded",
            "message": f"Configured: {', '.join(configured)}",
            "details": {"configured": configured, "missing": missing},
        }

    async def check_providers(self) -> dict[str, Any]:
        """
        Check provider liveness.

        Returns:
            Health check result.
        """
        try:
            providers = await self.registry.get_all_providers()
        except Exception as e:
            logger.error(f"Provider health check failed: {e}")
            return {
                "name": "providers",
                "status": "unhealthy",
                "message": str(e),
            }

        available = [ptype.value for ptype in providers]
        if not available:
            status = "unhealthy"
            message = "No providers available"
        elif len(available) < len(ProviderType):
            status = "degraded"
            message = f"Available: {', '.join(available)}"
        else:
            status = "healthy"
            message = "All providers available"

        return {
            "name": "providers",
            "status": status,
            "message": message,
            "details": {
                "available": available,
                "models": {ptype.value: p.model for ptype, p in providers.items()},
            },
        }

    async def check_all(self) -> dict[str, Any]:
        """
        Run all health checks.

        Returns:
            Aggregate health status.
        """
        logger.info("Running health checks")

        checks = [
            await self.check_credentials(),
            await self.check_providers(),
        ]

        statuses = [c["status"] for c in checks]

        if "unhealthy" in statuses:
            overall = "unhealthy"
        elif "degraded" in statuses:
            overall = "degraded"
        else:
            overall = "healthy"

        return {
            "status": overall,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": checks,
        }


async def check_health(registry: ProviderRegistry | None = None) -> dict[str, Any]:
    """
    Convenience function to run health checks.

    Returns:
        Health check results.
    """
    checker = HealthChecker(registry or ProviderRegistry())
    return await checker.check_all()
