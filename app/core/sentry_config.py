# app/core/sentry_config.py
"""
Sentry configuration for error tracking in production.

Enabled only when PRODUCTION=true and SENTRY_DSN is set.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from app.core.config import APP_VERSION, IS_PRODUCTION

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = ("cookie", "authorization", "x-api-key")

#: Fritext som användaren skrivit; skickas aldrig till Sentry.
SENSITIVE_FIELDS = ("memo", "address")

FILTERED = "[Filtered]"


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized, False otherwise.
    """
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not IS_PRODUCTION:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning("SENTRY_DSN not set. Error tracking disabled.")
        return False

    environment = os.getenv("SENTRY_ENVIRONMENT", "production")

    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[
            FastApiIntegration(),
            StarletteIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=0.1,
        sample_rate=1.0,
        release=os.getenv("RELEASE_VERSION", f"shiftbook@{APP_VERSION}"),
        environment=environment,
        send_default_pii=False,
        attach_stacktrace=True,
        before_send=before_send_hook,
    )

    logger.info("Sentry initialized (environment: %s)", environment)
    return True


def _scrub(value):
    if isinstance(value, dict):
        return {k: FILTERED if k in SENSITIVE_FIELDS else _scrub(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_scrub(v) for v in value]
    return value


def before_send_hook(event, hint):
    """
    Filter sensitive data before sending to Sentry.

    Removes auth headers and free text (memo, address) from request bodies.
    """
    request = event.get("request")
    if not request:
        return event

    headers = request.get("headers")
    if headers:
        for header in SENSITIVE_HEADERS:
            for key in list(headers):
                if key.lower() == header:
                    headers[key] = FILTERED

    if "data" in request:
        request["data"] = _scrub(request["data"])

    return event


def capture_exception(error: Exception, context: dict | None = None) -> None:
    """Skickar ett undantag till Sentry med valfri kontext (no-op utan init)."""
    with sentry_sdk.new_scope() as scope:
        for key, value in (context or {}).items():
            scope.set_context(key, value)
        sentry_sdk.capture_exception(error)
