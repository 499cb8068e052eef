"""Monitoring - provider health checks."""

from taskpilot.monitoring.health_check import HealthChecker, check_health

__all__ = ["HealthChecker", "check_health"]
