"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings"]


class Settings(BaseSettings):
    """depscope settings, read from ``DEPSCOPE_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="DEPSCOPE_",
        env_file=".env",
        extra="ignore",
    )

    namespace_separator: str = Field(default=".", description="Separator between namespace segments")
    factory_suffix: str = Field(
        default="Factory", description="Suffix of generated factory names"
    )
    trait_suffix: str = Field(default="Mixin", description="Class name suffix marking a trait")
    dependency_root: str = Field(
        default="vendor", description="Directory holding third-party vendor/package trees"
    )
    array_access_interface: str = Field(
        default="collections.abc.MutableMapping",
        description="Marker interface never reported as a dependency",
    )
    deprecation_markers: list[str] = Field(
        default_factory=lambda: ["@deprecated", ".. deprecated::"],
        description="Documentation markers flagging a type as deprecated",
    )
    package_command: str = Field(
        default="composer show --format=json",
        description="Command printing the installed packages as JSON; empty to skip versions",
    )
    project_root: str = Field(default=".", description="Directory the package command runs in")
    known_modules: list[str] = Field(
        default_factory=list, description="Names of the application modules"
    )
    log_level: str = Field(default="WARNING", description="Logging level")
