"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from echotune import __version__

DEFAULT_STATIONS_URL = "http://all.api.radio-browser.info/json/stations"
DEFAULT_COUNTRIES_URL = "http://all.api.radio-browser.info/json/countries"
DEFAULT_USER_AGENT = f"EchoTune/{__version__}"


class AppConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Playback
    volume: int = 10
    player_path: str = ""
    watchdog_interval: float = 0.1

    # Remote datasets
    stations_url: str = DEFAULT_STATIONS_URL
    countries_url: str = DEFAULT_COUNTRIES_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 60.0

    # Catalog
    large_catalog_threshold: int = 100

    # Internal fields not loaded from INI file
    data_dir: str = Field("", repr=False)
    config_path: str = Field("", repr=False)

    @field_validator("volume")
    @classmethod
    def validate_volume(cls, v: int) -> int:
        """VLC accepts a volume between 0 and 255."""
        if v < 0 or v > 255:
            raise ValueError("Volume must be between 0 and 255.")
        return v

    @field_validator("watchdog_interval", "request_timeout")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Intervals and timeouts must be greater than zero.")
        return v

    @field_validator("large_catalog_threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Large catalog threshold must be at least 1.")
        return v

    @field_validator("stations_url", "countries_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Dataset URL must be http(s), but got: {v!r}")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"data_dir", "config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
