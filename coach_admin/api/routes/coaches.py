"""
Coach record API endpoints.

Five endpoints over one resource. Every handler is a single repository
call; the repository does the read-modify-write of the collection.

Domain errors become HTTP errors here:
- CoachNotFoundError -> 404
- InvalidCoachError (including duplicate email) -> 400
- StorageError -> 500 with a generic message

Listing never fails on storage: an unreadable collection lists as empty.
"""

import logging
from typing import Any, Literal, Optional, Union

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from ...core.coaches.errors import (
    CoachNotFoundError,
    DuplicateEmailError,
    InvalidCoachError,
)
from ...core.coaches.models import Coach
from ...infrastructure.storage.client import StorageError
from ..dependencies import CoachRepositoryDep

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_DETAIL = "Coach not found"


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class CoachFields(BaseModel):
    """
    Editable coach fields.

    Everything is optional at this layer so that missing fields reach
    the domain validator and come back as a 400 naming the field,
    rather than as a schema error.
    """
    name: Optional[str] = Field(None, description="Coach's full name")
    email: Optional[str] = Field(None, description="Contact email, unique across coaches")
    category: Optional[str] = Field(None, description="Discipline, e.g. Yoga or Fitness")
    # Untyped so booleans and strings reach the domain rating rule as sent
    rating: Optional[Any] = Field(None, description="Rating from 1 to 5")
    status: Optional[str] = Field(None, description="active or inactive")


class CoachCreateRequest(CoachFields):
    """Request to create a coach. All five fields are required."""
    pass


class CoachUpdateRequest(CoachFields):
    """Request to update a coach. Omitted or null fields are left unchanged."""
    pass


class CoachResponse(BaseModel):
    """A coach record as stored."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Coach identifier")
    name: str
    email: str
    category: str
    rating: Union[int, float]
    status: Literal["active", "inactive"]
    created_at: str = Field(alias="createdAt", description="Creation time (ISO format, UTC)")

    @classmethod
    def from_coach(cls, coach: Coach) -> "CoachResponse":
        return cls.model_validate(coach.to_dict())


class DeleteResponse(BaseModel):
    """Acknowledgement of a deleted coach."""
    message: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[CoachResponse],
    status_code=status.HTTP_200_OK,
    summary="List coaches",
    description="Return every coach in insertion order",
)
async def list_coaches(repository: CoachRepositoryDep) -> list[CoachResponse]:
    return [CoachResponse.from_coach(coach) for coach in repository.list_coaches()]


@router.get(
    "/{coach_id}",
    response_model=CoachResponse,
    status_code=status.HTTP_200_OK,
    summary="Get coach",
    responses={404: {"description": NOT_FOUND_DETAIL}},
)
async def get_coach(coach_id: str, repository: CoachRepositoryDep) -> CoachResponse:
    try:
        coach = repository.get_coach(coach_id)
    except CoachNotFoundError:
        logger.warning("Coach not found", extra={"coach_id": coach_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)
    except StorageError as e:
        logger.error("Failed to fetch coach", extra={"coach_id": coach_id, "error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch coach"
        )

    return CoachResponse.from_coach(coach)


@router.post(
    "",
    response_model=CoachResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create coach",
    description="Create a coach. The server assigns id and createdAt.",
    responses={400: {"description": "Validation failed or email already exists"}},
)
async def create_coach(
    request: CoachCreateRequest,
    repository: CoachRepositoryDep,
) -> CoachResponse:
    """
    Create a coach.

    Rejects the request with 400 when a field is missing, the rating is
    outside 1-5, the status isn't active/inactive, the email is malformed,
    or another coach already uses the email.
    """
    try:
        coach = repository.create_coach(request.model_dump())
    except DuplicateEmailError as e:
        logger.warning("Rejected duplicate email", extra={"email": e.email})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InvalidCoachError as e:
        logger.warning(
            "Rejected coach creation",
            extra={"reason": str(e), "field": e.field}
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        logger.error("Failed to create coach", extra={"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create coach"
        )

    return CoachResponse.from_coach(coach)


@router.put(
    "/{coach_id}",
    response_model=CoachResponse,
    status_code=status.HTTP_200_OK,
    summary="Update coach",
    description="Overwrite any subset of name, email, category, rating and status",
    responses={
        400: {"description": "Validation failed or email already exists"},
        404: {"description": NOT_FOUND_DETAIL},
    },
)
async def update_coach(
    coach_id: str,
    request: CoachUpdateRequest,
    repository: CoachRepositoryDep,
) -> CoachResponse:
    try:
        coach = repository.update_coach(coach_id, request.model_dump(exclude_none=True))
    except CoachNotFoundError:
        logger.warning("Coach not found", extra={"coach_id": coach_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)
    except DuplicateEmailError as e:
        logger.warning(
            "Rejected duplicate email",
            extra={"coach_id": coach_id, "email": e.email}
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InvalidCoachError as e:
        logger.warning(
            "Rejected coach update",
            extra={"coach_id": coach_id, "reason": str(e), "field": e.field}
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        logger.error("Failed to update coach", extra={"coach_id": coach_id, "error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update coach"
        )

    return CoachResponse.from_coach(coach)


@router.delete(
    "/{coach_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete coach",
    responses={404: {"description": NOT_FOUND_DETAIL}},
)
async def delete_coach(coach_id: str, repository: CoachRepositoryDep) -> DeleteResponse:
    try:
        message = repository.delete_coach(coach_id)
    except CoachNotFoundError:
        logger.warning("Coach not found", extra={"coach_id": coach_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)
    except StorageError as e:
        logger.error("Failed to delete coach", extra={"coach_id": coach_id, "error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete coach"
        )

    return DeleteResponse(message=message)
