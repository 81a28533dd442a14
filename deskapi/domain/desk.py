from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class AccessToken:
    access_token: str = ""
    token_type: str = ""
    expires_in: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

@dataclass(frozen=True, slots=True)
class Department:
    id: str = ""
    name: str = ""
    description: str = ""
    is_enabled: bool = False

@dataclass(frozen=True, slots=True)
class Agent:
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    name: str = ""
    role_id: str = ""
    email_id: str = ""
    mobile: str = ""
    status: str = ""
    about_info: str = ""
    associated_department_ids: list[str] = field(default_factory=list)

@dataclass(frozen=True, slots=True)
class TicketUpdate:
    """Fields to change on a ticket; unset fields are left untouched server-side."""
    ticket_id: str
    assignee_id: str | None = None
    department_id: str | None = None
    status: str | None = None

@dataclass(frozen=True, slots=True)
class TicketUpdateResult:
    id: str = ""
    ticket_number: str = ""
    modified_time: str = ""
    status_type: str = ""
    status: str = ""
    department_id: str = ""
    assignee_id: str = ""
    is_deleted: bool = False
    error_msg: str = ""

    @property
    def ok(self) -> bool:
        return not self.error_msg

@dataclass(frozen=True, slots=True)
class TicketAssignee:
    first_name: str = ""
    last_name: str = ""

@dataclass(frozen=True, slots=True)
class TicketCustomFields:
    cf_reason: str = ""
    cf_reminderdate: str = ""

@dataclass(frozen=True, slots=True)
class TicketDetails:
    id: str = ""
    ticket_number: str = ""
    modified_time: str = ""
    closed_time: str = ""
    department_id: str = ""
    assignee_id: str = ""
    is_deleted: bool = False
    status: str = ""
    error_msg: str = ""
    assignee: TicketAssignee = field(default_factory=TicketAssignee)
    cf: TicketCustomFields = field(default_factory=TicketCustomFields)

    @property
    def ok(self) -> bool:
        return not self.error_msg
