"""Semantic version type used for the cluster software version."""

import re
from typing import Any

from pydantic import Field, model_serializer, model_validator

from .base import AdmissionBaseModel

SEMVER_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def _split_version(value: str) -> dict[str, Any]:
    value = value.strip()
    if not value:
        return {}
    match = SEMVER_PATTERN.match(value)
    if not match:
        raise ValueError(f"invalid semantic version: {value!r}")
    major, minor, patch, pre_release, build = match.groups()
    return {
        "major": int(major),
        "minor": int(minor),
        "patch": int(patch),
        "pre_release": pre_release or "",
        "build": build or "",
    }


class SemanticVersion(AdmissionBaseModel):
    """A semver 2.0 version.

    Serialised as its string form. The empty string parses to the zero
    version, which is how an unset version is represented.
    """

    major: int = Field(default=0, ge=0)
    minor: int = Field(default=0, ge=0)
    patch: int = Field(default=0, ge=0)
    pre_release: str = ""
    build: str = ""

    @classmethod
    def parse(cls, value: str) -> "SemanticVersion":
        """Parse a semver string, raising ValueError if it is malformed."""
        return cls(**_split_version(value))

    @model_validator(mode="before")
    @classmethod
    def parse_string(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, str):
            return _split_version(data)
        return data

    @model_serializer(mode="plain")
    def serialize(self) -> str:
        return str(self)

    def is_zero(self) -> bool:
        """True for the unset version. Build metadata is ignored."""
        return (
            self.major == 0
            and self.minor == 0
            and self.patch == 0
            and not self.pre_release
        )

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release:
            version += f"-{self.pre_release}"
        if self.build:
            version += f"+{self.build}"
        return version
