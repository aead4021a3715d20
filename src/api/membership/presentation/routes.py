"""HTTP routes for event membership.

The bearer access token of the request is the session id handed to the
membership service. Every mutating route answers with the authoritative
snapshot so clients can reconcile without a second read.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from membership.application.services import MembershipService
from membership.dependencies import get_membership_service, get_session_token
from membership.domain.value_objects import EventId
from membership.ports.exceptions import (
    EventNotFoundError,
    IdentityUnavailableError,
    MembershipRejectedError,
    StoreUnavailableError,
)
from membership.presentation.models import (
    MembershipSnapshotResponse,
    ParticipantResponse,
)

STORE_RETRY_AFTER_SECONDS = 5

router = APIRouter(
    prefix="/membership",
    tags=["membership"],
)

_ERROR_RESPONSES: dict[int | str, dict[str, str]] = {
    400: {"description": "Invalid event ID"},
    401: {"description": "Authentication required"},
    404: {"description": "Event not found"},
    409: {"description": "Request rejected (see detail.reason)"},
    503: {"description": "Storage temporarily unavailable, retry later"},
}


def _parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid event ID: {e}",
        ) from e


def _to_http_exception(error: Exception) -> HTTPException:
    """Translate a membership failure into the matching HTTP error."""
    if isinstance(error, IdentityUnavailableError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, MembershipRejectedError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"reason": error.reason.value, "message": str(error)},
        )
    if isinstance(error, EventNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {error.event_id.value} not found",
        )
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Storage temporarily unavailable",
        headers={"Retry-After": str(STORE_RETRY_AFTER_SECONDS)},
    )


_HANDLED_ERRORS = (
    IdentityUnavailableError,
    MembershipRejectedError,
    EventNotFoundError,
    StoreUnavailableError,
)


@router.get(
    "/events/{event_id}/membership",
    summary="Get membership",
    description="Current membership state of the caller for an event",
    responses=_ERROR_RESPONSES,
)
async def get_membership(
    event_id: str,
    service: Annotated[MembershipService, Depends(get_membership_service)],
    session_id: Annotated[str | None, Depends(get_session_token)],
) -> MembershipSnapshotResponse:
    """Return the caller's membership snapshot for an event."""
    parsed_id = _parse_event_id(event_id)
    try:
        snapshot = await service.snapshot(parsed_id, session_id)
    except _HANDLED_ERRORS as e:
        raise _to_http_exception(e) from e
    return MembershipSnapshotResponse.from_domain(snapshot)


@router.post(
    "/events/{event_id}/membership",
    summary="Join event",
    description="Confirm the caller for an event. Joining twice is a no-op.",
    responses=_ERROR_RESPONSES,
)
async def join_event(
    event_id: str,
    service: Annotated[MembershipService, Depends(get_membership_service)],
    session_id: Annotated[str | None, Depends(get_session_token)],
) -> MembershipSnapshotResponse:
    """Join an event.

    Raises:
        HTTPException: 409 with reason capacity_exceeded if the event is full
        HTTPException: 409 with reason event_closed if the event has started
    """
    parsed_id = _parse_event_id(event_id)
    try:
        snapshot = await service.join(parsed_id, session_id)
    except _HANDLED_ERRORS as e:
        raise _to_http_exception(e) from e
    return MembershipSnapshotResponse.from_domain(snapshot)


@router.delete(
    "/events/{event_id}/membership",
    summary="Leave event",
    description="Cancel the caller's attendance. Leaving twice is a no-op.",
    responses=_ERROR_RESPONSES,
)
async def leave_event(
    event_id: str,
    service: Annotated[MembershipService, Depends(get_membership_service)],
    session_id: Annotated[str | None, Depends(get_session_token)],
) -> MembershipSnapshotResponse:
    """Leave an event."""
    parsed_id = _parse_event_id(event_id)
    try:
        snapshot = await service.leave(parsed_id, session_id)
    except _HANDLED_ERRORS as e:
        raise _to_http_exception(e) from e
    return MembershipSnapshotResponse.from_domain(snapshot)


@router.post(
    "/events/{event_id}/membership/check-in",
    summary="Check in",
    description="Mark the caller as present. Requires a prior join.",
    responses=_ERROR_RESPONSES,
)
async def check_in(
    event_id: str,
    service: Annotated[MembershipService, Depends(get_membership_service)],
    session_id: Annotated[str | None, Depends(get_session_token)],
) -> MembershipSnapshotResponse:
    """Check in to an event.

    Raises:
        HTTPException: 409 with reason not_a_member if the caller never joined
    """
    parsed_id = _parse_event_id(event_id)
    try:
        snapshot = await service.check_in(parsed_id, session_id)
    except _HANDLED_ERRORS as e:
        raise _to_http_exception(e) from e
    return MembershipSnapshotResponse.from_domain(snapshot)


@router.get(
    "/events/{event_id}/participants",
    summary="List participants",
    description="Confirmed participants of an event in join order",
    responses=_ERROR_RESPONSES,
)
async def list_participants(
    event_id: str,
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> list[ParticipantResponse]:
    """List the confirmed participants of an event."""
    parsed_id = _parse_event_id(event_id)
    try:
        participants = await service.list_participants(parsed_id)
    except _HANDLED_ERRORS as e:
        raise _to_http_exception(e) from e
    return [ParticipantResponse.from_domain(p) for p in participants]
