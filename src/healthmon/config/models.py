"""Typed configuration models with Pydantic validation."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from healthmon.models import Resource, ResourceKind


class ServiceSettings(BaseModel):
    """Identification of the process embedding the monitor."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Service name")
    version: str = Field(default="0.0.0", min_length=1, description="Service version")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    format: Literal["json", "text"] = Field(default="json", description="Log output format")
    sampling: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Optional sampling ratio for low-severity logs",
    )


class MonitorSettings(BaseModel):
    """Aggregator and prober settings."""

    model_config = ConfigDict(frozen=True)

    timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Shared deadline covering the whole result collection of one check",
    )
    probe_mode: Literal["live", "synthetic"] = Field(
        default="live",
        description="Use network probers or the sleeping stand-ins",
    )
    synthetic_delay_seconds: float = Field(
        default=3.0,
        ge=0.0,
        description="Delay before a synthetic prober reports its status",
    )
    probe_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Client timeout applied by the live probers",
    )


class ResourceSettings(BaseModel):
    """A resource registered at startup."""

    model_config = ConfigDict(frozen=True)

    type: ResourceKind = Field(..., description="Resource kind")
    name: str = Field(..., min_length=1, description="Resource name, unique within its kind")
    handle: str = Field(..., min_length=1, description="Connection descriptor (URL, DSN)")
    critical: bool = Field(default=False, description="Escalate the check when this fails")

    def to_resource(self) -> Resource:
        return Resource(
            type=self.type.value,
            name=self.name,
            handle=self.handle,
            critical=self.critical,
        )


class AppSettings(BaseModel):
    """Root application settings model."""

    model_config = ConfigDict(frozen=True)

    service: ServiceSettings
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    monitor: MonitorSettings = Field(default_factory=MonitorSettings)
    resources: list[ResourceSettings] = Field(default_factory=list)
