import flask

from . import commands, routes, settings
from .api import Api
from .models import db

# -----------------------------------------------------------------------------


def create_app(config=None):
    """Create the catalog application.

    Defaults come from :py:mod:`bookstore.settings`, which reads the
    environment. The database extension is bound here, so the engine and its
    connection pool belong to the returned application.

    :param dict config: Overrides applied after the defaults.
    :return: The Flask application.
    :rtype: :py:class:`flask.Flask`
    """
    app = flask.Flask(__name__)
    app.config.from_object(settings)
    if config:
        app.config.update(config)

    db.init_app(app)

    api = Api(app, prefix=app.config["BOOKSTORE_API_PREFIX"])
    routes.register_routes(api)

    commands.init_app(app)

    return app
