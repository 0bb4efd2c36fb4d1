"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from fleetbook.core.config import BaseConfig, get_config
from fleetbook.core.logger import configure_logging
from fleetbook.core.logger import init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    Parameters
    ----------
    config:
        Config object or import path; defaults to the class selected by
        ``APP_ENV``.
    instance_relative_config:
        Also read ``instance/<instance_config_filename>`` when present.

    Notes
    -----
    Extensions come before the API so blueprints can rely on the
    infrastructure bundle, and error handlers come last so they cover every
    registered blueprint.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from fleetbook.core import proxy

    proxy.init_app(app)

    from fleetbook.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from fleetbook.core import cors

    cors.init_app(app)

    from fleetbook.api import init_app as init_api

    init_api(app)

    from fleetbook.core import errors

    errors.init_app(app)

    from fleetbook import cli as app_cli

    app_cli.init_app(app)

    return app
