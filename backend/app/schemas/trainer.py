"""
Trainer API Backend: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract.
Why:   Body binding, response serialization and OpenAPI docs from one place.
How:   FastAPI binds POST bodies to `Trainer` and serializes the envelopes.

Envelope format:
    Every response is wrapped as {"code": <HTTP status>, ...} with exactly one
    of `trainers`, `trainer` or `message` next to the code.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Resource Model
# ══════════════════════════════════════════════════════════════════════════


class Trainer(BaseModel):
    """
    What:  A Pokémon trainer: the single resource of the API.
    Who:   Bound from POST /trainer bodies, returned by every read endpoint.

    Binding rules:
        - strict types: "10", 10.5 or true are not accepted for `age`
        - absent keys and null values take zero values ("" and 0)
        - unknown keys are ignored
        - `age` must fit a signed 64-bit integer, the widest BSON integer
        - no other range or emptiness validation; names are not unique
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    name: str = Field(default="", description="Trainer name, used as lookup key")
    age: int = Field(
        default=0,
        ge=-(2**63),
        le=2**63 - 1,
        description="Trainer age in years",
    )
    city: str = Field(default="", description="Home city")

    @field_validator("name", "age", "city", mode="before")
    @classmethod
    def null_to_zero_value(cls, v: Any, info: ValidationInfo) -> Any:
        """A JSON null leaves the field at its zero value."""
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes
# ══════════════════════════════════════════════════════════════════════════


class TrainerListEnvelope(BaseModel):
    """Returned by GET /trainers. `trainers` is an empty list, never null."""
    code: int = Field(default=200, description="HTTP status echoed in the body")
    trainers: List[Trainer] = Field(default_factory=list)


class TrainerEnvelope(BaseModel):
    """Returned by GET /trainer/{name} and POST /trainer."""
    code: int = Field(default=200, description="HTTP status echoed in the body")
    trainer: Trainer


class MessageEnvelope(BaseModel):
    """
    What:  `{code, message}` body, used for DELETE /trainers and for every error.
    Why:   Clients parse success messages and errors with the same shape.
    """
    code: int = Field(description="HTTP status echoed in the body")
    message: str = Field(description="Human-readable message")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
