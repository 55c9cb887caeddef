"""
HRMS Employee Service — Pydantic Request/Response Schemas
==========================================================

What:  The JSON contract of the /employee endpoints.
How:   FastAPI decodes request bodies into `EmployeeIn` and serializes
       `EmployeeResponse`; Pydantic's lax mode does the type coercion
       ("30" → 30.0). Nothing else is validated.

Design Decision:
    Omitted fields take zero values (`""`, `0.0`) because update overwrites
    all three fields unconditionally; a partial body zeroes the rest.
    An explicit `null` is treated the same as an omitted field.

Body decoding rules (existing clients rely on them):
    - Keys match fields case-insensitively (`"Name"` sets `name`); when a
      field appears twice the later key wins.
    - `NaN`, `Infinity` and numbers overflowing a double are rejected (400):
      they are not JSON numbers and cannot be echoed back as JSON.
"""

from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeIn(BaseModel):
    """
    Body of POST /employee and PUT /employee/{id}.

    `id` is accepted so clients can send back what they received, but it is
    never written: create discards it, update replaces it with the path id.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    id: Optional[str] = Field(default=None, description="Ignored on write")
    name: str = Field(default="", description="Employee name")
    salary: float = Field(default=0.0, description="Salary")
    age: float = Field(default=0.0, description="Age")

    @model_validator(mode="before")
    @classmethod
    def fold_key_case(cls, data: Any) -> Any:
        """Map keys onto field names ignoring case, keeping body order."""
        if not isinstance(data, dict):
            return data
        fields = {name.lower(): name for name in cls.model_fields}
        folded = {}
        for key, value in data.items():
            target = fields.get(key.lower(), key) if isinstance(key, str) else key
            folded[target] = value
        return folded

    @field_validator("name", "salary", "age", mode="before")
    @classmethod
    def null_as_zero_value(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """An employee as stored, with its database-assigned id as a hex string."""
    id: str = Field(description="Database-assigned identifier (ObjectId hex)")
    name: str = Field(default="", description="Employee name")
    salary: float = Field(default=0.0, description="Salary")
    age: float = Field(default=0.0, description="Age")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
