"""Console entry point for the healthcurve metric server.

Installed as ``healthcurve-server``; also runnable with
``python -m healthcurve.core.server.main``. Host, port and log level come
from ``HC_*`` environment variables (see ``Settings``).
"""

from __future__ import annotations

import logging
from ipaddress import ip_address

from healthcurve.core.config.settings import get_settings
from healthcurve.core.server.app import create_app


def _is_loopback_host(host: str) -> bool:
    """True for ``localhost`` and any loopback IPv4/IPv6 literal."""
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Serve the metric card, score and path tools over Streamable HTTP.

    The tools take raw health readings and carry no authentication, so the
    server only binds to loopback unless ``HC_ALLOW_INSECURE_BIND`` is set.
    """
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.hc_log_level.upper(), logging.INFO))
    logger = logging.getLogger(__name__)

    if not settings.hc_allow_insecure_bind and not _is_loopback_host(settings.hc_host):
        raise RuntimeError(
            f"healthcurve-server will not expose health metric tools on {settings.hc_host!r}: "
            "bind to 127.0.0.1/localhost, or set HC_ALLOW_INSECURE_BIND=true "
            "behind your own authenticating proxy."
        )

    mcp = create_app(settings_override=settings)
    logger.info(
        "healthcurve-server listening on %s:%d (catalog: %s)",
        settings.hc_host,
        settings.hc_port,
        settings.catalog_dir,
    )
    mcp.run(
        transport="streamable-http",
        host=settings.hc_host,
        port=settings.hc_port,
    )


if __name__ == "__main__":
    run()
