import os

_SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    """Dotted path of the settings module picked by APP_ENV (development by default)."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _SETTINGS_BY_ENV.get(env, "config.development")
