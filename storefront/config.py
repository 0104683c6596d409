import os
import tomllib
from pathlib import Path

DEFAULT_CONFIG_PATH = "configs/config.toml"


def load_config(default_path=DEFAULT_CONFIG_PATH):
    """Read the TOML configuration file, returning an empty dict if it is missing.

    ``STOREFRONT_CONFIG`` takes precedence over ``default_path``.
    """
    path = Path(os.environ.get("STOREFRONT_CONFIG") or default_path)
    if not path.exists():
        return {}

    with path.open("rb") as f:
        return tomllib.load(f)


def database_settings(config, base_dir):
    """Build a Django ``DATABASES["default"]`` entry from the ``[database]`` table.

    Without a database table the project runs on a local SQLite file.
    """
    database = config.get("database")
    if not database:
        return {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": Path(base_dir) / "db.sqlite3",
        }

    return {
        "ENGINE": "django.db.backends.postgresql",
        "HOST": database.get("host", "localhost"),
        "PORT": str(database.get("port", 5432)),
        "USER": database.get("user", ""),
        "PASSWORD": database.get("password", ""),
        "NAME": database.get("dbname", ""),
        "OPTIONS": {"sslmode": database.get("sslmode", "disable")},
    }
