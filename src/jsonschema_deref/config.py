from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SiblingPolicy(StrEnum):
    """What happens to keys that sit next to $ref in the same object."""

    DISCARD = "discard"
    MERGE = "merge"


class DerefSettings(BaseSettings):
    reference_key: str | None = Field(default=None)
    sibling_policy: SiblingPolicy = Field(default=SiblingPolicy.DISCARD)
    http_timeout: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(env_prefix="JSONSCHEMA_DEREF_")
