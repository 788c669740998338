import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "smarthr.config.production"

    if env in {"test", "testing"}:
        return "smarthr.config.testing"

    return "smarthr.config.development"


def read_env(name: str, default: str = "") -> str:
    """Read an env var, dropping quotes that .env files often leave around values."""
    value = os.getenv(name)
    if not value:
        return default
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        value = value[1:-1]
    return value


def read_private_key(name: str = "FIREBASE_PRIVATE_KEY") -> str:
    return read_env(name).replace("\\n", "\n")
