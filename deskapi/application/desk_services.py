from __future__ import annotations
import logging
from collections.abc import Callable
from typing import TypeVar
from deskapi.application.ports.desk_port import DirectoryGateway, TicketGateway, TokenProvider
from deskapi.domain.desk import (
    AccessToken,
    Agent,
    Department,
    TicketDetails,
    TicketUpdate,
    TicketUpdateResult,
)
from deskapi.domain.results import ApiRejected, NoData, Outcome, Succeeded, TransportFailed
from deskapi.infrastructure.desk_client import DeskAPIError, DeskNotFoundError, DeskRejectedError


logger = logging.getLogger(__name__)

T = TypeVar("T")

def _call(action: str, call: Callable[[], T]) -> Outcome[T]:
    """Run one gateway call and tag its failures instead of raising them."""
    try:
        return Succeeded(call())
    except DeskRejectedError as exc:
        logger.warning("Desk %s rejected: %s", action, exc.message)
        return ApiRejected(message=exc.message)
    except DeskNotFoundError as exc:
        logger.warning("Desk %s found nothing: %s", action, exc)
        return NoData(message=str(exc))
    except DeskAPIError as exc:
        logger.error("Desk %s failed: %s", action, exc)
        return TransportFailed(exc)

def _check_message(outcome: Outcome[T], message: Callable[[T], str]) -> Outcome[T]:
    if isinstance(outcome, Succeeded):
        text = message(outcome.value)
        if text:
            return ApiRejected(message=text, value=outcome.value)
    return outcome

class TokenService:
    def __init__(self, provider: TokenProvider) -> None:
        self._provider = provider

    def access_token(self) -> Outcome[AccessToken]:
        outcome = _call("token exchange", self._provider.fetch_access_token)
        return _check_message(outcome, lambda token: token.error)

class DirectoryService:
    def __init__(self, gateway: DirectoryGateway) -> None:
        self._gateway = gateway

    def organization(self, access_token: str) -> Outcome[str]:
        return _call("organization lookup", lambda: self._gateway.get_organization(access_token))

    def departments(self, access_token: str) -> Outcome[list[Department]]:
        return _call("department listing", lambda: self._gateway.list_departments(access_token))

    def agents(
        self,
        access_token: str,
        from_: str = "",
        limit: str = "",
        email: str = "",
    ) -> Outcome[list[Agent]]:
        return _call(
            "agent listing",
            lambda: self._gateway.list_agents(access_token, from_=from_, limit=limit, email=email),
        )

class TicketService:
    """Ticket operations bound to one access token and organization.

        Every method returns a tagged outcome: ``Succeeded`` when the call went
        through and the body carries no error message, ``ApiRejected`` when the
        remote API reported a logical failure, ``TransportFailed`` otherwise.
        """

    def __init__(self, gateway: TicketGateway, access_token: str, org_id: str) -> None:
        self._gateway = gateway
        self._access_token = access_token
        self._org_id = org_id

    def update_status(self, ticket_id: str, status: str) -> Outcome[TicketUpdateResult]:
        outcome = _call(
            "ticket status update",
            lambda: self._gateway.update_ticket_status(self._access_token, self._org_id, ticket_id, status),
        )
        return _check_message(outcome, lambda result: result.error_msg)

    def reassign(self, update: TicketUpdate) -> Outcome[TicketUpdateResult]:
        outcome = _call(
            "ticket reassignment",
            lambda: self._gateway.reassign_ticket(self._access_token, self._org_id, update),
        )
        return _check_message(outcome, lambda result: result.error_msg)

    def move(self, update: TicketUpdate) -> Outcome[TicketUpdateResult]:
        outcome = _call(
            "ticket move",
            lambda: self._gateway.move_ticket(self._access_token, self._org_id, update),
        )
        return _check_message(outcome, lambda result: result.error_msg)

    def details(self, ticket_id: str) -> Outcome[TicketDetails]:
        outcome = _call(
            "ticket lookup",
            lambda: self._gateway.get_ticket_details(self._access_token, self._org_id, ticket_id),
        )
        return _check_message(outcome, lambda details: details.error_msg)
