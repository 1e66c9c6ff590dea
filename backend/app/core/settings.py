import os

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


class Settings:
    def __init__(self):
        load_dotenv()
        self.app_name = os.getenv("APP_NAME", "School Console Student View")
        self.api_version = "1.0.0"
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.viewer_timezone = os.getenv("VIEWER_TIMEZONE", "UTC")
        self.feedback_window_days = int(os.getenv("FEEDBACK_WINDOW_DAYS", "30"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
            if origin.strip()
        ]


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings():
    """Drop the cached instance so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
