from __future__ import annotations
from typing import Protocol
from deskapi.domain.desk import (
    AccessToken,
    Agent,
    Department,
    TicketDetails,
    TicketUpdate,
    TicketUpdateResult,
)


class TokenProvider(Protocol):
    def fetch_access_token(self) -> AccessToken:
        ...

class DirectoryGateway(Protocol):
    def get_organization(self, access_token: str) -> str:
        ...

    def list_departments(self, access_token: str) -> list[Department]:
        ...

    def list_agents(
        self,
        access_token: str,
        from_: str = "",
        limit: str = "",
        email: str = "",
    ) -> list[Agent]:
        ...

class TicketGateway(Protocol):
    def update_ticket_status(
        self,
        access_token: str,
        org_id: str,
        ticket_id: str,
        status: str,
    ) -> TicketUpdateResult:
        ...

    def reassign_ticket(self, access_token: str, org_id: str, update: TicketUpdate) -> TicketUpdateResult:
        ...

    def move_ticket(self, access_token: str, org_id: str, update: TicketUpdate) -> TicketUpdateResult:
        ...

    def get_ticket_details(self, access_token: str, org_id: str, ticket_id: str) -> TicketDetails:
        ...
