"""Application factory wiring Flask extensions, auth components and blueprints."""

from __future__ import annotations

from flask import Flask

from blog_auth.core.config import BaseConfig, get_config
from blog_auth.core.logger import configure_logging
from blog_auth.core.logger import init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    Raises
    ------
    ConfigurationError
        When the JWT secrets are missing or identical, or the session backend
        is misconfigured. The process must not start in that state.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from blog_auth.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from blog_auth.core import cors

    cors.init_app(app)

    # Built once per process; handlers reach it via app.extensions
    from blog_auth.api.deps import AUTH_SERVICE_KEY
    from blog_auth.infra.wiring import build_auth_service

    app.extensions[AUTH_SERVICE_KEY] = build_auth_service(app)

    from blog_auth.api import init_app as init_api

    init_api(app)

    from blog_auth.core import errors

    errors.init_app(app)

    from blog_auth import cli as app_cli

    app_cli.init_app(app)

    return app
