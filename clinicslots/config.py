"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .adapters.clock import parse_clock
from .domain.exceptions import InvalidInterval, UnknownPractitionerError
from .domain.models import WorkingDay

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

CONFIG_FILE_NAME = "clinicslots.yaml"


class DayHours(BaseModel):
    """Opening hours for one weekday."""
    start: str = "09:00"
    end: str = "18:00"
    is_open: bool = True

    @field_validator("start", "end")
    @classmethod
    def validate_clock(cls, value: str) -> str:
        """Validate the value is an HH:MM time of day."""
        try:
            parse_clock(value)
        except InvalidInterval as exc:
            raise ValueError(str(exc)) from exc
        return value.strip()

    @model_validator(mode="after")
    def validate_order(self) -> "DayHours":
        """Ensure the day opens before it closes."""
        if parse_clock(self.end) <= parse_clock(self.start):
            raise ValueError(f"end ({self.end}) must be later than start ({self.start})")
        return self

    def start_minute(self) -> int:
        return parse_clock(self.start)

    def end_minute(self) -> int:
        return parse_clock(self.end)


def _default_business_hours() -> Dict[str, DayHours]:
    hours = {day: DayHours(start="09:00", end="18:00") for day in WEEKDAYS[:5]}
    hours["saturday"] = DayHours(start="09:00", end="16:00")
    hours["sunday"] = DayHours(start="10:00", end="14:00", is_open=False)
    return hours


def _validate_weekday_keys(value: Dict[str, DayHours]) -> Dict[str, DayHours]:
    normalized: Dict[str, DayHours] = {}
    for key, hours in value.items():
        day = key.lower()
        if day not in WEEKDAYS:
            raise ValueError(f"Unknown weekday '{key}', expected one of {', '.join(WEEKDAYS)}")
        normalized[day] = hours
    return normalized


class Practitioner(BaseModel):
    """Practitioner configuration."""
    id: str
    name: str  # Used as alias on the command line
    business_hours: Dict[str, DayHours] = Field(default_factory=dict)
    slot_granularity_minutes: Optional[int] = None

    @field_validator("business_hours")
    @classmethod
    def validate_weekdays(cls, value: Dict[str, DayHours]) -> Dict[str, DayHours]:
        """Ensure override keys are weekday names."""
        return _validate_weekday_keys(value)

    @field_validator("slot_granularity_minutes")
    @classmethod
    def validate_granularity(cls, value: Optional[int]) -> Optional[int]:
        """Ensure slot granularity is positive when given."""
        if value is not None and value <= 0:
            raise ValueError("slot_granularity_minutes must be greater than zero")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Asia/Kolkata"
    slot_granularity_minutes: int = 30
    business_hours: Dict[str, DayHours] = Field(default_factory=_default_business_hours)
    practitioners: List[Practitioner] = Field(default_factory=list)
    bookings_file: Optional[Path] = None

    @field_validator("slot_granularity_minutes")
    @classmethod
    def validate_granularity(cls, value: int) -> int:
        """Ensure slot granularity is positive."""
        if value <= 0:
            raise ValueError("slot_granularity_minutes must be greater than zero")
        return value

    @field_validator("business_hours")
    @classmethod
    def validate_business_hours(cls, value: Dict[str, DayHours]) -> Dict[str, DayHours]:
        """Normalise weekday keys and fill missing days with the defaults."""
        merged = _default_business_hours()
        merged.update(_validate_weekday_keys(value))
        return merged

    @field_validator("practitioners")
    @classmethod
    def validate_practitioners(cls, value: List[Practitioner]) -> List[Practitioner]:
        """Ensure practitioner ids and names are unique."""
        seen_ids: set[str] = set()
        seen_names: set[str] = set()
        for practitioner in value:
            name_key = practitioner.name.lower()
            if practitioner.id in seen_ids:
                raise ValueError(f"Duplicate practitioner id detected: {practitioner.id}")
            if name_key in seen_names:
                raise ValueError(f"Duplicate practitioner name detected: {practitioner.name}")
            seen_ids.add(practitioner.id)
            seen_names.add(name_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Relative ``bookings_file`` paths are resolved against the config
        file's directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a {CONFIG_FILE_NAME} file. See clinicslots.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if config.bookings_file is not None and not config.bookings_file.is_absolute():
            config.bookings_file = config_path.parent / config.bookings_file
        return config

    def find_practitioner(self, identifier: str) -> Practitioner | None:
        """Find a practitioner by id or by name (case-insensitive)."""
        for practitioner in self.practitioners:
            if practitioner.id == identifier:
                return practitioner
        for practitioner in self.practitioners:
            if practitioner.name.lower() == identifier.lower():
                return practitioner
        return None

    def resolve_practitioner(self, identifier: str) -> str:
        """
        Resolve a practitioner identifier (id or name) to a practitioner id.

        Raises:
            UnknownPractitionerError: If identifier cannot be resolved
        """
        practitioner = self.find_practitioner(identifier)
        if practitioner:
            return practitioner.id

        raise UnknownPractitionerError(
            f"Unknown practitioner: '{identifier}'. "
            f"Use a configured practitioner id or name."
        )

    def hours_for(self, practitioner_id: Optional[str], weekday: str) -> DayHours:
        """Return the opening hours for a weekday, applying practitioner overrides."""
        practitioner = self.find_practitioner(practitioner_id) if practitioner_id else None
        if practitioner and weekday in practitioner.business_hours:
            return practitioner.business_hours[weekday]
        return self.business_hours[weekday]

    def working_day_for(self, practitioner_id: Optional[str], day: date) -> WorkingDay:
        """Build the WorkingDay for a practitioner on a calendar day."""
        weekday = WEEKDAYS[day.weekday()]
        hours = self.hours_for(practitioner_id, weekday)

        granularity = self.slot_granularity_minutes
        practitioner = self.find_practitioner(practitioner_id) if practitioner_id else None
        if practitioner and practitioner.slot_granularity_minutes:
            granularity = practitioner.slot_granularity_minutes

        return WorkingDay(
            start_minute=hours.start_minute(),
            end_minute=hours.end_minute(),
            slot_granularity_minutes=granularity,
            is_open=hours.is_open,
        )


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for clinicslots.yaml in current directory
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / CONFIG_FILE_NAME

    return config_path
