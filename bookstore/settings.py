import os

# -----------------------------------------------------------------------------


def _env_flag(name):
    return os.environ.get(name, "").lower() in ("1", "true", "yes", "on")


# -----------------------------------------------------------------------------

SQLALCHEMY_DATABASE_URI = os.environ.get(
    "DATABASE_URL", "sqlite:///bookstore.db"
)
SQLALCHEMY_ECHO = _env_flag("SQLALCHEMY_ECHO")
SQLALCHEMY_TRACK_MODIFICATIONS = False

BOOKSTORE_API_PREFIX = "/api"

# Extra names for `flask shell`, and its prompt (konch's default if unset).
BOOKSTORE_SHELL_CONTEXT = {}
BOOKSTORE_SHELL_PROMPT = None
