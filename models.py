"""
Typed configuration and response models for the mTag interaction client.

The registration endpoint answers with loosely shaped JSON. Fields with the
wrong type are dropped to None rather than failing the whole interaction,
so a partially useful response still reaches the delegate.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_API_URL = "https://api.mtag.io/v2/interactions"


class Config(BaseModel):
    """Settings passed explicitly into every interaction."""

    api_url: str = Field(default=DEFAULT_API_URL, description="Interactions route")
    tech: str = Field(default="n", description="Technology tag sent with every interaction")
    debug: bool = Field(default=False, description="Log at DEBUG level")
    strict_base36: bool = Field(
        default=False,
        description="Reject malformed base 36 tag IDs instead of decoding them as 0",
    )
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra request headers")


class Location(BaseModel):
    """Location payload. data and system are always lists of strings."""

    model_config = ConfigDict(extra="allow")

    data: List[str] = Field(default_factory=list)
    system: List[str] = Field(default_factory=list)

    @field_validator("data", "system", mode="before")
    @classmethod
    def _string_list_or_empty(cls, value: Any) -> List[str]:
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return value
        return []


class InteractionResult(BaseModel):
    """Reshaped interactions response handed to the delegate."""

    device_country: Optional[str] = Field(default=None, serialization_alias="deviceCountry")
    tag_verified: Optional[Union[bool, str]] = Field(default=None, serialization_alias="tagVerified")
    campaigns: Optional[Dict[str, Any]] = None
    location: Optional[Location] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_device(cls, data: Any) -> Any:
        if isinstance(data, dict) and "device" in data:
            device = data["device"]
            data = {k: v for k, v in data.items() if k != "device"}
            data["device_country"] = device.get("country") if isinstance(device, dict) else None
        return data

    @field_validator("device_country", mode="before")
    @classmethod
    def _str_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("tag_verified", mode="before")
    @classmethod
    def _flag_or_none(cls, value: Any) -> Optional[Union[bool, str]]:
        return value if isinstance(value, (bool, str)) else None

    @field_validator("campaigns", "location", mode="before")
    @classmethod
    def _object_or_none(cls, value: Any) -> Optional[Dict[str, Any]]:
        return value if isinstance(value, dict) else None

    def to_dict(self) -> Dict[str, Any]:
        """Return the result keyed the way delegates expect (deviceCountry, tagVerified, ...)."""
        return self.model_dump(by_alias=True)
