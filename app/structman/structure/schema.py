"""Pydantic models for the structure configuration file.

This module defines the declarative schema for required directory
layouts. Each base directory (cache, config, document, ...) carries a
nested StructureItem describing its files and subdirectories.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from structman.core.paths import BaseDirectory
from structman.structure.models import ConfigError, validate_entry_name


class StructureItemOptions(BaseModel):
    """Options for a single directory in the structure.

    Attributes:
        repair: Replace the entry if it exists with the wrong kind.
    """

    model_config = ConfigDict(extra="forbid")

    repair: Annotated[bool, Field(description="Recreate entries with the wrong kind")] = False


class StructureItem(BaseModel):
    """A directory in the structure with its files and subdirectories.

    Attributes:
        options: Policy flags for this directory.
        files: Names of required files directly inside this directory.
        dirs: Required subdirectories keyed by name.
    """

    model_config = ConfigDict(extra="forbid")

    options: Annotated[
        StructureItemOptions,
        Field(default_factory=StructureItemOptions, description="Directory options"),
    ]
    files: Annotated[
        list[str],
        Field(default_factory=list, description="Required files"),
    ]
    dirs: Annotated[
        dict[str, StructureItem],
        Field(default_factory=dict, description="Required subdirectories"),
    ]

    @model_validator(mode="after")
    def validate_unique_names(self) -> StructureItem:
        """Validate that no name is declared twice in this directory."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for name in self.files:
            if name in seen:
                duplicates.append(name)
            seen.add(name)
        duplicates.extend(name for name in self.dirs if name in seen)
        if duplicates:
            msg = f"Names declared more than once: {sorted(set(duplicates))}"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_entry_names(self) -> StructureItem:
        """Validate that every name is a single, non-reserved path segment."""
        for name in [*self.files, *self.dirs]:
            if not name:
                msg = "Entry names cannot be empty"
                raise ValueError(msg)
            try:
                validate_entry_name(name)
            except ConfigError as e:
                raise ValueError(str(e)) from None
        return self


class StructureConfig(BaseModel):
    """Top-level structure configuration.

    Keys for base directories are camelCase in the file (``appData``,
    ``localData``); snake_case names are accepted as well.

    Attributes:
        identifier: Application identifier used by the app* base directories.
        roots: Explicit root path overrides keyed by base directory name.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    identifier: Annotated[str | None, Field(description="Application identifier")] = None
    roots: Annotated[
        dict[str, str],
        Field(default_factory=dict, description="Root path overrides per base"),
    ]

    app_cache: StructureItem | None = None
    app_config: StructureItem | None = None
    app_data: StructureItem | None = None
    app_local_data: StructureItem | None = None
    app_log: StructureItem | None = None
    audio: StructureItem | None = None
    cache: StructureItem | None = None
    config: StructureItem | None = None
    data: StructureItem | None = None
    desktop: StructureItem | None = None
    document: StructureItem | None = None
    download: StructureItem | None = None
    executable: StructureItem | None = None
    font: StructureItem | None = None
    home: StructureItem | None = None
    local_data: StructureItem | None = None
    picture: StructureItem | None = None
    public: StructureItem | None = None
    resource: StructureItem | None = None
    runtime: StructureItem | None = None
    temp: StructureItem | None = None
    template: StructureItem | None = None
    video: StructureItem | None = None

    @model_validator(mode="after")
    def validate_root_names(self) -> StructureConfig:
        """Validate that root overrides only name known base directories."""
        known = {base.value for base in BaseDirectory}
        unknown = sorted(name for name in self.roots if name not in known)
        if unknown:
            msg = f"Unknown base directories in roots: {unknown}"
            raise ValueError(msg)
        return self

    def get_item(self, base: BaseDirectory) -> StructureItem | None:
        """Get the structure declared for a base directory.

        Args:
            base: Base directory to look up.

        Returns:
            The StructureItem, or None if the base is not configured.
        """
        item: StructureItem | None = getattr(self, base.field_name)
        return item

    def configured_bases(self) -> list[BaseDirectory]:
        """List base directories that declare a structure.

        Returns:
            Configured bases in BaseDirectory order.
        """
        return [base for base in BaseDirectory if self.get_item(base) is not None]
