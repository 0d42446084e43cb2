"""
Trainer API Backend: Trainer Document Mapping
==============================================

What:  Converts between the `Trainer` schema and its MongoDB document form.
Why:   Field names must round-trip exactly (`name`, `age`, `city`); keeping the
       mapping here stops `_id` from leaking into API responses and stops
       the driver from mutating API objects.

Document shape (collection `trainers`):
    {"_id": ObjectId(...), "name": "Ash", "age": 10, "city": "Pallet Town"}
"""

from typing import Any, Dict, Mapping

from app.schemas.trainer import Trainer


def to_document(trainer: Trainer) -> Dict[str, Any]:
    """
    Return a fresh dict for insert_one.

    A new dict each call: pymongo writes the generated `_id` into the mapping
    it is given.
    """
    return trainer.model_dump()


def from_document(doc: Mapping[str, Any]) -> Trainer:
    """
    Decode a stored document into a Trainer.

    Lax validation: the driver may return an int64 or an integral double for
    `age`. `_id` and any other extra keys are ignored.

    Raises:
        pydantic.ValidationError: the document cannot be represented as a Trainer.
    """
    return Trainer.model_validate(dict(doc), strict=False)
