"""Place and forecast data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlaceCandidate(BaseModel):
    """A single geocoding match."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str = ""
    admin1: str | None = None
    latitude: float
    longitude: float

    @property
    def display_name(self) -> str:
        """Return name, country and region for suggestion lists."""
        label = f"{self.name}, {self.country}" if self.country else self.name
        if self.admin1:
            label = f"{label}, {self.admin1}"
        return label

    @property
    def query_text(self) -> str:
        """Return the text submitted when this candidate is picked."""
        return f"{self.name}, {self.country}"


class Location(BaseModel):
    """Resolved location of a forecast."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str = ""
    latitude: float
    longitude: float


class CurrentConditions(BaseModel):
    """Current weather conditions."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    apparent_temperature: float
    humidity_percent: int
    precipitation_mm: float = 0.0
    weather_code: int
    wind_speed_kph: float
    wind_direction_deg: float
    time: datetime | None = None


class HourlyPrecipitation(BaseModel):
    """Hourly precipitation probability series."""

    model_config = ConfigDict(frozen=True)

    timestamps: tuple[datetime, ...] = ()
    precipitation_probability_percent: tuple[int | None, ...] = ()

    @model_validator(mode="after")
    def check_aligned(self) -> "HourlyPrecipitation":
        """Ensure both series line up index for index."""
        if len(self.timestamps) != len(self.precipitation_probability_percent):
            raise ValueError(
                f"Hourly series length mismatch: {len(self.timestamps)} timestamps, "
                f"{len(self.precipitation_probability_percent)} probabilities"
            )
        return self

    def __len__(self) -> int:
        return len(self.timestamps)


class Forecast(BaseModel):
    """Complete forecast for one resolved location."""

    model_config = ConfigDict(frozen=True)

    location: Location
    current: CurrentConditions
    hourly: HourlyPrecipitation = Field(default_factory=HourlyPrecipitation)
    timezone: str = "GMT"
    fetched_at: datetime = Field(default_factory=datetime.now)

    @property
    def display_location(self) -> str:
        """Return "Name, Country" for headers."""
        if self.location.country:
            return f"{self.location.name}, {self.location.country}"
        return self.location.name
