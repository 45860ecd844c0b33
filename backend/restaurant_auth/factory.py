"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from restaurant_auth.core.config import BaseConfig, get_config
from restaurant_auth.core.logger import configure_logging, init_app as init_logging
from restaurant_auth.services._shared.ports import Clock


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    clock: Clock | None = None,
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object (or import path) for ``app.config.from_object``;
        inferred from ``APP_ENV`` when omitted.
    :param clock: Optional time source for token issuance and revocation.
    :raises ConfigurationError: If required settings are missing.
    """

    app = Flask(__name__)
    app.config.from_object(get_config() if config is None else config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Trust one hop of X-Forwarded-* so rate limits see the client address
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore[method-assign]

    from restaurant_auth.core import extensions

    extensions.init_app(app, clock=clock)

    init_logging(app)

    from restaurant_auth.core import cors

    cors.init_app(app)

    from restaurant_auth.api import init_app as init_api

    init_api(app)

    from restaurant_auth.core import errors

    errors.init_app(app)

    return app
