"""Configuration model and loading."""

import argparse
import json
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from typoledger.utils.constants import Constants
from typoledger.utils.helpers import expand_file_path

# CLI argument names that map directly onto Config fields
_CLI_OVERRIDES = (
    "record_file",
    "all_time_threshold",
    "session_threshold",
    "spelling_language",
    "min_word_frequency",
    "case_folding",
    "verbose",
    "debug",
)


class Config(BaseModel):
    """Settings for the correction ledger."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    record_file: str = Constants.DEFAULT_RECORD_FILE
    all_time_threshold: int = Field(default=Constants.DEFAULT_ALL_TIME_THRESHOLD, ge=1)
    session_threshold: int = Field(default=Constants.DEFAULT_SESSION_THRESHOLD, ge=1)

    case_folding: bool = True
    spelling_language: str = "en"
    min_word_frequency: float = Field(default=0.0, ge=0.0)

    verbose: bool = False
    debug: bool = False

    @field_validator("record_file")
    @classmethod
    def expand_record_file(cls, value: str) -> str:
        """Expand ~ in the record path and reject empty paths."""
        if not value or not value.strip():
            raise ValueError("record_file must not be empty")
        return expand_file_path(value)

    @model_validator(mode="after")
    def validate_cross_fields(self) -> "Config":
        """Warn about threshold combinations that defeat ambiguity detection."""
        if self.session_threshold >= self.all_time_threshold:
            logger.warning(
                f"session_threshold ({self.session_threshold}) should be lower than "
                f"all_time_threshold ({self.all_time_threshold}); "
                "session-only activation will never happen"
            )
        if self.session_threshold == 1 or self.all_time_threshold == 1:
            logger.warning(
                "A threshold of 1 activates a correction on its first occurrence, "
                "before a competing correction can be observed"
            )
        return self

    @property
    def record_path(self) -> Path:
        """The durable record as a Path."""
        return Path(self.record_file)


def _read_json_config(config_path: str) -> dict:
    """Read a JSON config file into a dict."""
    with open(expand_file_path(config_path), encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: top level must be a JSON object")
    return data


def load_config(
    config_path: str | None,
    args: argparse.Namespace | None = None,
    parser: argparse.ArgumentParser | None = None,
) -> Config:
    """Build a Config from an optional JSON file and CLI arguments.

    CLI arguments that are not None override values from the JSON file.

    Args:
        config_path: Path to a JSON config file, or None
        args: Parsed CLI arguments, or None
        parser: Parser used to report errors; if None, errors are raised

    Returns:
        Validated Config
    """
    data: dict = {}
    try:
        if config_path:
            data.update(_read_json_config(config_path))

        if args is not None:
            for name in _CLI_OVERRIDES:
                value = getattr(args, name, None)
                if value is not None:
                    data[name] = value

        return Config(**data)
    except (OSError, ValueError, ValidationError) as e:
        if parser is None:
            raise
        parser.error(f"invalid configuration: {e}")
        raise  # parser.error exits; keeps type checkers happy
