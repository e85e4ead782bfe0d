import os

_ENVIRONMENTS = {
    "development": "config.development",
    "dev": "config.development",
    "testing": "config.testing",
    "test": "config.testing",
    "production": "config.production",
    "prod": "config.production",
}


def get_settings_module() -> str:
    """Dotted path of the settings module for the current environment.

    HR_SETTINGS_MODULE wins when set; otherwise APP_ENV picks one of the
    bundled modules and anything unknown falls back to development.
    """

    explicit = os.getenv("HR_SETTINGS_MODULE", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENVIRONMENTS.get(env, "config.development")
