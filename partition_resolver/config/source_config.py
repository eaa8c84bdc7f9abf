"""Source configuration model.

Parses the JSON description of a time-partitioned source, together with
the execution mode it is read in, into engine-ready objects.
"""

from __future__ import annotations

import json
from datetime import tzinfo
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from partition_resolver.core.domain.durations import duration_for_template
from partition_resolver.core.domain.errors import TemplateError
from partition_resolver.core.domain.types import (
    DateRange,
    IdentityStrategy,
    SourcePolicy,
    resolve_timezone,
)
from partition_resolver.core.events.sinks.null_event_bus import NullEventBus
from partition_resolver.io.local_fs import LocalFileSystem
from partition_resolver.io.object_storage_fs import ObjectStorageFileSystem
from partition_resolver.sources.mode import ExecutionMode
from partition_resolver.sources.time_pathed import TimePathedSource
from partition_resolver.taps.schemes import DelimitedScheme, JsonLineScheme, TextLineScheme

if TYPE_CHECKING:
    from partition_resolver.core.events.event_bus import EventBus
    from partition_resolver.core.ports.filesystem import FileSystem
    from partition_resolver.core.ports.tap import Scheme


class SchemeConfig(BaseModel):
    kind: Literal["text_line", "delimited", "json_line"] = "text_line"
    separator: str = Field(default="\t", min_length=1, max_length=1)
    quote: str | None = Field(default=None, min_length=1, max_length=1)
    fields: list[str] | None = None
    skip_header: bool = False
    write_header: bool = False
    strict: bool = True

    model_config = ConfigDict(extra="forbid")

    def build(self) -> Scheme:
        fields = tuple(self.fields) if self.fields is not None else None

        if self.kind == "delimited":
            return DelimitedScheme(
                separator=self.separator,
                quote=self.quote,
                fields=fields,
                skip_header=self.skip_header,
                write_header=self.write_header,
                strict=self.strict,
            )
        if self.kind == "json_line":
            return JsonLineScheme(fields=fields)
        return TextLineScheme()


class LocalModeConfig(BaseModel):
    kind: Literal["local"]
    root: str | None = None

    model_config = ConfigDict(extra="forbid")

    def build_filesystem(self) -> FileSystem:
        return LocalFileSystem(self.root)


class ObjectStorageModeConfig(BaseModel):
    kind: Literal["object_storage"]
    bucket: str = Field(..., min_length=1)
    region: str | None = None
    auth_mode: Literal["instance_principal", "api_key"] = "instance_principal"
    oci_config_file: str | None = None
    oci_profile: str = "DEFAULT"

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_auth(self) -> ObjectStorageModeConfig:
        if self.auth_mode == "api_key" and self.oci_config_file is None:
            raise ValueError("oci_config_file is required for api_key auth")
        return self

    def build_filesystem(self) -> FileSystem:
        return ObjectStorageFileSystem.connect(
            bucket=self.bucket,
            region=self.region,
            auth_mode=self.auth_mode,
            oci_config_file=self.oci_config_file,
            oci_profile=self.oci_profile,
        )


ModeConfig = Annotated[
    LocalModeConfig | ObjectStorageModeConfig,
    Field(discriminator="kind"),
]


class SourceConfig(BaseModel):
    """Time-partitioned source plus the mode it is resolved in.

    JSON example:
        {
          "template": "/logs/%Y/%m/%d/*",
          "start": "2012-01-30",
          "end": "2012-02-02",
          "timezone": "UTC",
          "policy": "lenient_any",
          "mode": {"kind": "object_storage", "bucket": "data"}
        }
    """

    template: str = Field(..., min_length=1)
    start: str = Field(..., min_length=1)
    end: str = Field(..., min_length=1)
    timezone: str = Field(..., min_length=1)

    policy: SourcePolicy | None = None
    completion_marker: str | None = Field(default=None, min_length=1)
    scheme: SchemeConfig = Field(default_factory=SchemeConfig)
    mode: ModeConfig = Field(default_factory=lambda: LocalModeConfig(kind="local"))

    strict: bool = False
    identity: IdentityStrategy = IdentityStrategy.RANDOM
    max_workers: int = Field(default=1, ge=1)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> SourceConfig:
        return cls.model_validate(obj)

    @classmethod
    def from_file(cls, path: str | Path) -> SourceConfig:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        return cls.from_json_obj(json.loads(path.read_text(encoding="utf-8")))

    @field_validator("template")
    @classmethod
    def _template_has_token(cls, value: str) -> str:
        try:
            duration_for_template(value)
        except TemplateError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        resolve_timezone(value)
        return value

    @model_validator(mode="after")
    def validate_range(self) -> SourceConfig:
        """Parse both bounds eagerly so bad dates fail at load time."""
        self.date_range()
        return self

    def zone(self) -> tzinfo:
        return resolve_timezone(self.timezone)

    def date_range(self) -> DateRange:
        return DateRange.parse(self.start, self.end, self.zone())

    def build_source(self) -> TimePathedSource:
        return TimePathedSource(
            self.template,
            self.date_range(),
            self.zone(),
            scheme=self.scheme.build(),
            policy=self.policy,
            completion_marker=self.completion_marker,
        )

    def build_mode(
        self,
        *,
        event_bus: EventBus | None = None,
        filesystem: FileSystem | None = None,
    ) -> ExecutionMode:
        """Build the execution mode; ``filesystem`` overrides the configured one."""
        name = "local" if self.mode.kind == "local" else "distributed"
        return ExecutionMode(
            name=name,
            filesystem=filesystem if filesystem is not None else self.mode.build_filesystem(),
            strict=self.strict,
            event_bus=event_bus if event_bus is not None else NullEventBus(),
            max_workers=self.max_workers,
            identity=self.identity,
        )
