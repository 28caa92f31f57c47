"""Pydantic models for build metadata read from apktool.yml."""

from typing import Annotated, Any, Final

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

# apktool.yml is loaded without type resolution, so nulls arrive as text
YAML_NULLS: Final[frozenset[str]] = frozenset({"", "~", "null", "Null", "NULL"})


def _null_to_none(value: Any) -> Any:
    if isinstance(value, str) and value in YAML_NULLS:
        return None
    return value


YamlInt = Annotated[int | None, BeforeValidator(_null_to_none)]
YamlStr = Annotated[str | None, BeforeValidator(_null_to_none)]


class SdkInfo(BaseModel):
    """The `sdkInfo` block of apktool.yml."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    min_sdk_version: YamlInt = Field(default=None, alias="minSdkVersion")
    target_sdk_version: YamlInt = Field(default=None, alias="targetSdkVersion")


class VersionInfo(BaseModel):
    """The `versionInfo` block of apktool.yml.

    Values are kept as written, so `versionName: 1.10` stays "1.10".
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    version_code: YamlInt = Field(default=None, alias="versionCode")
    version_name: YamlStr = Field(default=None, alias="versionName")


class MetaInfo(BaseModel):
    """Subset of the apktool.yml document needed for build metadata."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    sdk_info: Annotated[SdkInfo | None, BeforeValidator(_null_to_none)] = Field(
        default=None, alias="sdkInfo"
    )
    version_info: Annotated[VersionInfo | None, BeforeValidator(_null_to_none)] = (
        Field(default=None, alias="versionInfo")
    )


class AndroidSdk(BaseModel):
    """An SDK level paired with its Android release name."""

    model_config = ConfigDict(frozen=True)

    level: int
    """API level (e.g., 34)."""

    version_name: str | None = None
    """Release name (e.g., 'Android 14'), None for unknown levels."""


class GradleInfo(BaseModel):
    """Build metadata of the analyzed app."""

    model_config = ConfigDict(frozen=True)

    version_code: int | None = None
    version_name: str | None = None
    min_sdk: AndroidSdk | None = None
    target_sdk: AndroidSdk | None = None

    def to_json(self) -> str:
        """Serialize to compact JSON text."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, raw: str) -> "GradleInfo":
        """Parse JSON text produced by to_json()."""
        return cls.model_validate_json(raw)
