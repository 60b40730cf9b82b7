"""
Pydantic models for the radio-browser.info station and country datasets.

Field names are Pythonic; the radio-browser wire names are accepted as aliases.
"""

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_STATION_NAME = "Unknown"


class Station(BaseModel):
    """An immutable internet radio station record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Identity
    station_id: str = Field("", alias="stationuuid")
    change_id: str = Field("", alias="changeuuid")

    # Descriptive
    name: str = ""
    url: str = ""
    resolved_url: str = Field("", alias="url_resolved")
    homepage: str = ""
    favicon: str = ""
    tags: str = ""
    codec: str = ""
    bitrate: int = 0
    hls: bool = False

    # Geographic
    country: str = ""
    country_code: str = Field("", alias="countrycode")
    state: str = ""
    language: str = ""
    language_codes: str = Field("", alias="languagecodes")
    latitude: float | None = Field(None, alias="geo_lat")
    longitude: float | None = Field(None, alias="geo_long")

    # Quality and usage
    votes: int = 0
    click_count: int = Field(0, alias="clickcount")
    click_trend: int = Field(0, alias="clicktrend")
    ssl_error_flag: bool = Field(False, alias="ssl_error")
    last_check_ok: bool = Field(False, alias="lastcheckok")
    has_extended_info: bool = False

    # Timestamps (ISO 8601, kept as strings)
    last_change_time: str | None = Field(None, alias="lastchangetime_iso8601")
    last_check_time: str | None = Field(None, alias="lastchecktime_iso8601")
    last_check_ok_time: str | None = Field(None, alias="lastcheckoktime_iso8601")
    last_local_check_time: str | None = Field(
        None, alias="lastlocalchecktime_iso8601"
    )
    click_timestamp: str | None = Field(None, alias="clicktimestamp_iso8601")

    @property
    def stream_url(self) -> str:
        """The URL handed to the player."""
        return self.url or self.resolved_url

    @property
    def has_blank_name(self) -> bool:
        return not self.name.strip()

    def __str__(self) -> str:
        return f"{self.name.strip()} [{self.country}]"


class Country(BaseModel):
    """A country entry from the countries dataset."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    iso_code: str = Field("", alias="iso_3166_1")
    station_count: int = Field(0, alias="stationcount")

    def __str__(self) -> str:
        return f"[{self.iso_code}] {self.name} ({self.station_count} total stations)"
