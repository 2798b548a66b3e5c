from typing import Annotated, Any
from pydantic import BaseModel, Field, field_validator, model_validator

from settracker.constants import WorkoutType
from settracker.timeutil import normalize_iso

IdStr = Annotated[str, Field(min_length=1, max_length=64)]
NonNegInt = Annotated[int, Field(ge=0)]
WeightFloat = Annotated[float, Field(ge=0, le=2000)]

_CAMEL = {"populate_by_name": True}


def _normalize_optional_iso(v: str | None) -> str | None:
    if v is None or v == "":
        return None
    try:
        return normalize_iso(v)
    except ValueError:
        raise ValueError("must be an ISO-8601 timestamp")


class SetFields(BaseModel):
    """Fields a user edits on a set; shared by create, patch and the full record."""
    workout_type: WorkoutType | None = Field(default=None, alias="workoutType")
    weight_lb: WeightFloat | None = Field(default=None, alias="weightLb")
    weight_is_bodyweight: bool = Field(default=False, alias="weightIsBodyweight")
    reps: NonNegInt | None = None
    rest_seconds: NonNegInt | None = Field(default=None, alias="restSeconds")
    duration_seconds: NonNegInt | None = Field(default=None, alias="durationSeconds")
    performed_at_iso: str | None = Field(default=None, alias="performedAtISO")

    model_config = _CAMEL

    @field_validator("performed_at_iso")
    @classmethod
    def performed_at_is_iso(cls, v: str | None) -> str | None:
        return _normalize_optional_iso(v)

    @model_validator(mode="after")
    def bodyweight_drops_weight(self):
        # bodyweight sets carry no numeric load
        if self.weight_is_bodyweight and self.weight_lb is not None:
            self.weight_lb = None
        return self


class SetCreate(SetFields):
    pass


class SetPatch(SetFields):
    id: IdStr
    updated_at_iso: str | None = Field(default=None, alias="updatedAtISO")

    @field_validator("updated_at_iso")
    @classmethod
    def updated_at_is_iso(cls, v: str | None) -> str | None:
        return _normalize_optional_iso(v)

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller actually sent, minus the id."""
        return self.model_dump(exclude_unset=True, exclude={"id", "updated_at_iso"})


class LoggedSet(SetFields):
    id: IdStr
    created_at_iso: str = Field(alias="createdAtISO")
    # filled from created_at_iso when absent; always a string after validation
    updated_at_iso: str | None = Field(default=None, alias="updatedAtISO")

    model_config = {"populate_by_name": True, "from_attributes": True}

    @field_validator("created_at_iso")
    @classmethod
    def created_at_is_iso(cls, v: str) -> str:
        try:
            return normalize_iso(v)
        except ValueError:
            raise ValueError("must be an ISO-8601 timestamp")

    @field_validator("updated_at_iso")
    @classmethod
    def updated_at_is_iso(cls, v: str | None) -> str | None:
        return _normalize_optional_iso(v)

    @model_validator(mode="after")
    def updated_defaults_to_created(self):
        if self.updated_at_iso is None:
            self.updated_at_iso = self.created_at_iso
        return self

    @property
    def last_modified_iso(self) -> str:
        return self.updated_at_iso or self.created_at_iso


class BulkSyncRequest(BaseModel):
    sets: list[LoggedSet] = Field(default_factory=list)
    deleted_ids: list[IdStr] = Field(default_factory=list, alias="deletedIds")

    model_config = _CAMEL


class DeleteRequest(BaseModel):
    id: IdStr | None = None
