from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pydantic
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError

DEFAULT_CATEGORY_ADDONS: dict[str, float] = {
    "groceries": 0,
    "parcels": 0,
    "food": 0,
    "auto_parts": 5,
    "heavy_haul": 15,
    "special_transport": 25,
    "liquids": 5,
    "passengers": 0,
    "retail": 0,
    "firewood": 10,
    "misc": 0,
    "beer_run": 10,
    "rideshare": 0,
}


class PricingSettings(BaseSettings):
    """Fare parameters. Defaults are the live marketplace values."""

    base_rate_per_km: float = Field(default=0.35, ge=0.0)
    floor_price: float = Field(default=10, ge=0.0)
    beer_run_base: float = Field(default=25, ge=0.0)
    beer_run_surcharge: float = Field(
        default=1.2,
        ge=1.0,
        description="After-hours multiplier applied to every beer run",
    )
    rideshare_per_seat: float = Field(default=5, ge=0.0)
    category_addons: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_ADDONS)
    )

    model_config = SettingsConfigDict(env_prefix="PRICING_")

    @field_validator("category_addons")
    @classmethod
    def validate_addons(cls, v: dict[str, float]) -> dict[str, float]:
        negative = sorted(k for k, amount in v.items() if amount < 0)
        if negative:
            raise ValueError(f"Category addons must be non-negative: {', '.join(negative)}")
        return v


class ETASettings(BaseSettings):
    average_speed_kmh: float = Field(
        default=70.0,
        gt=0.0,
        description="Straight-line travel speed used for estimates (rural average)",
    )
    buffer_tag: str = "(estimate)"

    model_config = SettingsConfigDict(env_prefix="ETA_")


class SearchSettings(BaseSettings):
    """Home feed search defaults and location refinement thresholds."""

    default_center_lat: float = 51.6426
    default_center_lng: float = -121.2960
    radius_steps: list[float] = Field(default_factory=lambda: [10, 25, 100, 200, 300])
    default_radius_km: float = 10
    jitter_min_deg: float = Field(default=0.0015, ge=0.0)
    jitter_max_deg: float = Field(default=0.002, ge=0.0)

    refine_accuracy_threshold_m: float = Field(default=50.0, gt=0.0)
    refine_distance_threshold_m: float = Field(default=30.0, ge=0.0)
    location_cache_ttl_seconds: int = Field(default=300, ge=0)

    model_config = SettingsConfigDict(env_prefix="SEARCH_")

    @model_validator(mode="after")
    def validate_radius_steps(self) -> "SearchSettings":
        if not self.radius_steps:
            raise ValueError("radius_steps must not be empty")
        if any(b <= a for a, b in zip(self.radius_steps, self.radius_steps[1:], strict=False)):
            raise ValueError(f"radius_steps must be strictly increasing, got {self.radius_steps}")
        if self.default_radius_km not in self.radius_steps:
            raise ValueError(
                f"default_radius_km {self.default_radius_km} is not one of {self.radius_steps}"
            )
        if self.jitter_max_deg < self.jitter_min_deg:
            raise ValueError("jitter_max_deg must be >= jitter_min_deg")
        return self


class HotShotSettings(BaseSettings):
    lookahead_days: int = Field(
        default=14,
        ge=1,
        le=60,
        description="Days searched (today included) for the next open availability window",
    )
    default_timezone: str = "America/Vancouver"

    model_config = SettingsConfigDict(env_prefix="HOTSHOT_")

    @field_validator("default_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v


class LoggingSettings(BaseSettings):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    eta: ETASettings = Field(default_factory=ETASettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    hotshot: HotShotSettings = Field(default_factory=HotShotSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        ConfigurationError: an environment value is missing or invalid.
        ``details`` maps the dotted setting path to the validation message.
    """
    try:
        return Settings()
    except pydantic.ValidationError as e:
        details = {".".join(str(part) for part in err["loc"]): err["msg"] for err in e.errors()}
        raise ConfigurationError(f"Invalid settings: {e.error_count()} error(s)", details) from e
