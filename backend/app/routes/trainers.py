"""
Trainer API Backend: Trainer Route Handlers
============================================

What:  The four trainer endpoints.
Why:   The whole public surface of the service.
How:   Each handler makes one repository call and wraps the result in a
       `{code, ...}` envelope. Errors are raised, never returned: the global
       handlers in main.py render them.

Route Inventory:
    GET    /trainers         → list every trainer
    GET    /trainer/{name}   → first trainer with this name
    POST   /trainer          → insert a trainer, echo it back (200, not 201)
    DELETE /trainers         → delete every trainer
"""

import logging

from fastapi import APIRouter, Depends

from app.repositories.trainer_repository import TrainerRepository, get_trainer_repository
from app.schemas.trainer import (
    MessageEnvelope,
    Trainer,
    TrainerEnvelope,
    TrainerListEnvelope,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Trainers"])

# Error responses shared by every route for the OpenAPI docs
_ERROR_RESPONSES = {
    400: {"description": "Bad request or trainer not found", "model": MessageEnvelope},
    502: {"description": "Database failure", "model": MessageEnvelope},
}


@router.get(
    "/trainers",
    response_model=TrainerListEnvelope,
    responses=_ERROR_RESPONSES,
    summary="List all trainers",
)
async def list_trainers(
    repository: TrainerRepository = Depends(get_trainer_repository),
) -> TrainerListEnvelope:
    """
    Return every stored trainer in the database's natural order.

    Stored documents that cannot be decoded are left out of the list.
    """
    trainers = await repository.list_all()
    return TrainerListEnvelope(code=200, trainers=trainers)


@router.get(
    "/trainer/{name}",
    response_model=TrainerEnvelope,
    responses=_ERROR_RESPONSES,
    summary="Get a trainer by name",
)
async def get_trainer(
    name: str,
    repository: TrainerRepository = Depends(get_trainer_repository),
) -> TrainerEnvelope:
    """
    Return the first trainer whose name matches exactly.

    A name with no match answers 400, the same status as a bad request.
    """
    trainer = await repository.find_by_name(name)
    return TrainerEnvelope(code=200, trainer=trainer)


@router.post(
    "/trainer",
    response_model=TrainerEnvelope,
    responses=_ERROR_RESPONSES,
    summary="Create a trainer",
)
async def create_trainer(
    trainer: Trainer,
    repository: TrainerRepository = Depends(get_trainer_repository),
) -> TrainerEnvelope:
    """
    Insert a trainer and echo it back.

    Binding failures (non-JSON, missing body, wrong types) never reach this
    function: FastAPI raises RequestValidationError and main.py answers 400.
    """
    await repository.insert(trainer)
    return TrainerEnvelope(code=200, trainer=trainer)


@router.delete(
    "/trainers",
    response_model=MessageEnvelope,
    responses=_ERROR_RESPONSES,
    summary="Delete all trainers",
)
async def delete_trainers(
    repository: TrainerRepository = Depends(get_trainer_repository),
) -> MessageEnvelope:
    """Delete every trainer. The deleted count is logged, not returned."""
    await repository.delete_all()
    return MessageEnvelope(code=200, message="all trainers deleted")
