"""Timer resource model."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Value a field keeps when the body sends null for it
_ZERO_VALUES: dict[str, Any] = {
    "timer_id": "",
    "expires": "",
    "meta_tags": {},
    "callback_reference": "",
    "delete_after": 0,
}


class Timer(BaseModel):
    """A registered timer description.

    Only the alias names are accepted on input; they are the wire and
    document names. Absent or null fields decode to their zero values.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    timer_id: str = Field(default="", alias="timerid")
    expires: str = ""
    meta_tags: dict[str, str] = Field(default_factory=dict, alias="metaTags")
    callback_reference: str = Field(default="", alias="callbackReference")
    delete_after: int = Field(default=0, alias="deleteAfter")

    @field_validator("*", mode="before")
    @classmethod
    def null_to_zero_value(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            zero = _ZERO_VALUES[info.field_name]
            return dict(zero) if isinstance(zero, dict) else zero
        return value

    def to_document(self) -> dict[str, Any]:
        """Convert to the stored/wire representation."""
        return self.model_dump(by_alias=True)

    def mutable_fields(self) -> dict[str, Any]:
        """Fields a replace is allowed to write (everything but deleteAfter)."""
        return self.model_dump(by_alias=True, exclude={"delete_after"})

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Timer":
        """Create from a stored document, ignoring store-specific keys like _id."""
        return cls.model_validate(document)
