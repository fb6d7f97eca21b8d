"""Logging and output configuration models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class LoggingConfig(BaseModel):
    """Configuration for logging behavior."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root log level when neither --verbose nor --quiet is given"
    )

    mode: Literal["classic", "minimal"] = Field(
        default="classic",
        description="Log rendering: 'minimal' strips markup and emoji for CI logs",
    )

    suppress_modules: list[str] = Field(
        default=["asyncio", "urllib3"],
        description="Library modules whose debug logs are hidden in non-verbose mode",
    )


class OutputConfig(BaseModel):
    """Configuration for exported discovery messages."""

    directory: str = Field(
        default="discovery", description="Default export directory"
    )

    format: Literal["files", "jsonl"] = Field(
        default="files",
        description="'files' writes one JSON file per discovery topic, 'jsonl' one line per message",
    )

    indent: int | None = Field(
        default=2, ge=0, le=8, description="JSON indentation for 'files' output"
    )

    model_config = ConfigDict(coerce_numbers_to_str=True)
