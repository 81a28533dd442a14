from __future__ import annotations
import logging
from typing import Any
from urllib.parse import quote
import requests
from requests import RequestException
from deskapi.config import DeskAPIConfig
from deskapi.domain.desk import (
    AccessToken,
    Agent,
    Department,
    TicketAssignee,
    TicketCustomFields,
    TicketDetails,
    TicketUpdate,
    TicketUpdateResult,
)
from deskapi.shared.normalization import (
    as_mapping,
    normalize_bool,
    normalize_int,
    normalize_str,
    normalize_str_list,
)


logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"
DEPARTMENTS_PAGE_SIZE = 100
TICKET_INCLUDE = "assignee,departments"
REASSIGNED_STATUS = "Open"

class DeskAPIError(RuntimeError):
    """Raised when the Desk API cannot be called or its response cannot be parsed."""

class DeskTransportError(DeskAPIError):
    """Raised when the request fails to send, or a non-2xx response has no usable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

class DeskDecodeError(DeskAPIError):
    """Raised when a response body is not JSON of the expected shape."""

class DeskNotFoundError(DeskAPIError):
    """Raised when a lookup succeeds but returns no data."""

class DeskRejectedError(DeskAPIError):
    """Raised when a well-formed response reports a failure and there is no record to carry it."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

class DeskClient:
    """HTTP client for the Desk REST API.
        Every public method performs exactly one request through the shared
        session and maps the JSON body into a domain record. Ticket and token
        records keep a failure reported inside a well-formed body (``message`` /
        ``error``) on the record itself; read operations that return plain
        values raise ``DeskRejectedError`` instead.
        """

    def __init__(
        self,
        config: DeskAPIConfig,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._session = session if session is not None else requests.Session()

    # oauth

    def authorization_url(self) -> str:
        """Build the consent URL a user visits to grant a new refresh token."""
        params = {
            "scope": self._config.scope,
            "client_id": self._config.client_id,
            "response_type": self._config.response_type,
            "access_type": self._config.access_type,
            "redirect_uri": self._config.redirect_uri,
        }
        url = self._config.accounts_url + self._config.authorization_slug
        prepared = requests.Request("GET", url, params=params).prepare()
        return str(prepared.url)

    def fetch_access_token(self) -> AccessToken:
        """Exchange the configured refresh token for an access token."""
        form = {
            "refresh_token": self._config.refresh_token,
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "scope": self._config.scope,
            "redirect_uri": self._config.redirect_uri,
            "grant_type": self._config.grant_type,
        }
        data = self._send(
            "POST",
            self._config.accounts_url + self._config.token_slug,
            headers={"Content-Type": FORM_CONTENT_TYPE},
            data=form,
        )

        token = AccessToken(
            access_token=normalize_str(data.get("access_token")),
            token_type=normalize_str(data.get("token_type")),
            expires_in=normalize_int(data.get("expires_in")),
            error=normalize_str(data.get("error")),
        )
        if token.error:
            logger.warning("Desk OAuth token exchange rejected: %s", token.error)
        else:
            logger.info("Obtained Desk access token (expires in %d seconds)", token.expires_in)
        return token

    def get_access_token(self) -> str:
        """Return the access token string.
            Raises:
                DeskRejectedError: if the OAuth server answered with an ``error``.
            """
        token = self.fetch_access_token()
        if token.error:
            raise DeskRejectedError(token.error)
        return token.access_token

    def revoke_refresh_token(self) -> None:
        self._send(
            "POST",
            self._config.accounts_url + self._config.revoke_slug,
            headers={"Content-Type": FORM_CONTENT_TYPE},
            data={"token": self._config.refresh_token},
        )
        logger.info("Revoked Desk refresh token")

    # organization / directory

    def configured_org(self) -> str:
        """Return the organization id supplied in configuration, without calling the API."""
        return self._config.org_id

    def get_organization(self, access_token: str) -> str:
        """Return the id of the first organization visible to the token.
            Raises:
                DeskRejectedError: if the response carries an API error message.
                DeskNotFoundError: if the response lists no organization.
            """
        data = self._send(
            "GET",
            self._api_url("organizations"),
            headers=self._read_headers(access_token),
        )
        _raise_if_rejected(data, "organization lookup")

        organizations = [item for item in _data_items(data) if isinstance(item, dict)]
        if not organizations:
            msg = "Desk API returned no organizations for the access token"
            logger.error(msg)
            raise DeskNotFoundError(msg)

        org_id = normalize_str(organizations[0].get("id"))
        logger.info("Resolved Desk organization id=%s (%d visible)", org_id, len(organizations))
        return org_id

    def list_departments(self, access_token: str) -> list[Department]:
        data = self._send(
            "GET",
            self._api_url("departments"),
            headers=self._read_headers(access_token),
            params={"limit": DEPARTMENTS_PAGE_SIZE},
        )
        _raise_if_rejected(data, "department listing")

        departments = [_to_department(item) for item in _data_items(data) if isinstance(item, dict)]
        logger.info("Fetched %d departments", len(departments))
        return departments

    def list_agents(
        self,
        access_token: str,
        from_: str = "",
        limit: str = "",
        email: str = "",
    ) -> list[Agent]:
        """List agents, optionally paginated and filtered by email.
            Empty arguments are left out of the query string entirely.
            """
        params: dict[str, str] = {}
        if from_:
            params["from"] = from_
        if limit:
            params["limit"] = limit
        if email:
            params["fieldName"] = "emailId"
            params["searchStr"] = email

        data = self._send(
            "GET",
            self._api_url("agents"),
            headers=self._read_headers(access_token),
            params=params or None,
        )
        _raise_if_rejected(data, "agent listing")

        agents = [_to_agent(item) for item in _data_items(data) if isinstance(item, dict)]
        logger.info("Fetched %d agents", len(agents))
        return agents

    # tickets

    def update_ticket_status(
        self,
        access_token: str,
        org_id: str,
        ticket_id: str,
        status: str,
    ) -> TicketUpdateResult:
        data = self._send(
            "PATCH",
            self._api_url("tickets", ticket_id),
            headers=self._write_headers(access_token, org_id),
            json_body={"status": status},
        )
        return _log_update(_to_update_result(data), "status update", ticket_id)

    def reassign_ticket(
        self,
        access_token: str,
        org_id: str,
        update: TicketUpdate,
    ) -> TicketUpdateResult:
        """Assign a ticket to an agent/department. Reassigned tickets are always reopened."""
        body = _partial_body(
            assigneeId=update.assignee_id,
            departmentId=update.department_id,
        )
        body["status"] = REASSIGNED_STATUS

        data = self._send(
            "PATCH",
            self._api_url("tickets", update.ticket_id),
            headers=self._write_headers(access_token, org_id),
            json_body=body,
        )
        return _log_update(_to_update_result(data), "reassignment", update.ticket_id)

    def move_ticket(
        self,
        access_token: str,
        org_id: str,
        update: TicketUpdate,
    ) -> TicketUpdateResult:
        data = self._send(
            "POST",
            self._api_url("tickets", update.ticket_id, "move"),
            headers=self._write_headers(access_token, org_id),
            json_body=_partial_body(departmentId=update.department_id),
        )
        return _log_update(_to_update_result(data), "department move", update.ticket_id)

    def get_ticket_details(
        self,
        access_token: str,
        org_id: str,
        ticket_id: str,
    ) -> TicketDetails:
        headers = self._read_headers(access_token)
        headers["orgId"] = org_id

        data = self._send(
            "GET",
            self._api_url("tickets", ticket_id),
            headers=headers,
            params={"include": TICKET_INCLUDE},
        )

        details = _to_ticket_details(data)
        if details.error_msg:
            logger.warning("Desk API rejected ticket lookup %s: %s", ticket_id, details.error_msg)
        return details

    # plumbing

    def _api_url(self, *segments: str) -> str:
        path = "/".join(quote(segment, safe="") for segment in segments)
        return f"{self._config.api_base_url.rstrip('/')}/{path}"

    def _authorization(self, access_token: str) -> str:
        return f"{self._config.auth_scheme}-oauthtoken {access_token}"

    def _read_headers(self, access_token: str) -> dict[str, str]:
        return {
            "Content-Type": FORM_CONTENT_TYPE,
            "Authorization": self._authorization(access_token),
        }

    def _write_headers(self, access_token: str, org_id: str) -> dict[str, str]:
        return {
            "Content-Type": JSON_CONTENT_TYPE,
            "orgId": org_id,
            "Authorization": self._authorization(access_token),
        }

    def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform one request and return the decoded JSON object.
            An empty body on a 2xx response decodes to an empty dict.
            Raises:
                DeskTransportError: on network failure, or non-2xx without a JSON body.
                DeskDecodeError: on a 2xx body that is not a JSON object.
            """

        logger.debug("Desk API %s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                params=params,
                data=data,
                json=json_body,
                timeout=self._config.timeout_seconds,
            )
        except RequestException as exc:
            msg = f"Error calling Desk API {method} {url}: {exc}"
            logger.error(msg)
            raise DeskTransportError(msg) from exc

        status_code = response.status_code
        if not response.text.strip():
            if not response.ok:
                msg = f"Desk API {method} {url} returned HTTP {status_code} with an empty body"
                logger.error(msg)
                raise DeskTransportError(msg, status_code=status_code)
            return {}

        try:
            payload = response.json()
        except ValueError as exc:
            if not response.ok:
                msg = f"Desk API {method} {url} returned HTTP {status_code}: {exc}"
                logger.error(msg)
                raise DeskTransportError(msg, status_code=status_code) from exc
            msg = f"Failed to parse Desk API response from {method} {url} as JSON: {exc}"
            logger.error(msg)
            raise DeskDecodeError(msg) from exc

        if not isinstance(payload, dict):
            msg = f"Unexpected response format from Desk API {method} {url}: {type(payload).__name__}"
            logger.error(msg)
            raise DeskDecodeError(msg)

        if not response.ok:
            reason = normalize_str(payload.get("message") or payload.get("error"))
            if not reason:
                # no message for the caller to act on
                msg = (
                    f"Desk API {method} {url} returned HTTP {status_code}: "
                    f"{normalize_str(payload.get('errorCode')) or 'no error message'}"
                )
                logger.error(msg)
                raise DeskTransportError(msg, status_code=status_code)
            logger.warning("Desk API %s %s returned HTTP %d: %s", method, url, status_code, reason)
        return payload

def _raise_if_rejected(data: dict[str, Any], action: str) -> None:
    message = normalize_str(data.get("message") or data.get("errorCode"))
    if message:
        msg = f"Desk API rejected {action}: {message}"
        logger.error(msg)
        raise DeskRejectedError(message)

def _partial_body(**fields: str | None) -> dict[str, Any]:
    """Keep only the fields that were actually set."""
    return {name: value for name, value in fields.items() if value}

def _data_items(data: dict[str, Any]) -> list[Any]:
    items = data.get("data")
    if items is None:
        return []
    if not isinstance(items, list):
        msg = f"Unexpected response shape from Desk API: 'data' is {type(items).__name__}, not a list"
        logger.error(msg)
        raise DeskDecodeError(msg)
    return items

def _to_department(item: dict[str, Any]) -> Department:
    return Department(
        id=normalize_str(item.get("id")),
        name=normalize_str(item.get("name")),
        description=normalize_str(item.get("description")),
        is_enabled=normalize_bool(item.get("isEnabled")),
    )

def _to_agent(item: dict[str, Any]) -> Agent:
    return Agent(
        id=normalize_str(item.get("id")),
        first_name=normalize_str(item.get("firstName")),
        last_name=normalize_str(item.get("lastName")),
        name=normalize_str(item.get("name")),
        role_id=normalize_str(item.get("roleId")),
        email_id=normalize_str(item.get("emailId")),
        mobile=normalize_str(item.get("mobile")),
        status=normalize_str(item.get("status")),
        about_info=normalize_str(item.get("aboutInfo")),
        associated_department_ids=normalize_str_list(item.get("associatedDepartmentIds")),
    )

def _to_update_result(data: dict[str, Any]) -> TicketUpdateResult:
    return TicketUpdateResult(
        id=normalize_str(data.get("id")),
        ticket_number=normalize_str(data.get("ticketNumber")),
        modified_time=normalize_str(data.get("modifiedTime")),
        status_type=normalize_str(data.get("statusType")),
        status=normalize_str(data.get("status")),
        department_id=normalize_str(data.get("departmentId")),
        assignee_id=normalize_str(data.get("assigneeId")),
        is_deleted=normalize_bool(data.get("isDeleted")),
        error_msg=normalize_str(data.get("message")),
    )

def _to_ticket_details(data: dict[str, Any]) -> TicketDetails:
    assignee = as_mapping(data.get("assignee"))
    cf = as_mapping(data.get("cf"))
    return TicketDetails(
        id=normalize_str(data.get("id")),
        ticket_number=normalize_str(data.get("ticketNumber")),
        modified_time=normalize_str(data.get("modifiedTime")),
        closed_time=normalize_str(data.get("closedTime")),
        department_id=normalize_str(data.get("departmentId")),
        assignee_id=normalize_str(data.get("assigneeId")),
        is_deleted=normalize_bool(data.get("isDeleted")),
        status=normalize_str(data.get("status")),
        error_msg=normalize_str(data.get("message")),
        assignee=TicketAssignee(
            first_name=normalize_str(assignee.get("firstName")),
            last_name=normalize_str(assignee.get("lastName")),
        ),
        cf=TicketCustomFields(
            cf_reason=normalize_str(cf.get("cf_reason")),
            cf_reminderdate=normalize_str(cf.get("cf_reminderdate")),
        ),
    )

def _log_update(result: TicketUpdateResult, action: str, ticket_id: str) -> TicketUpdateResult:
    if result.error_msg:
        logger.warning("Desk API rejected ticket %s for %s: %s", action, ticket_id, result.error_msg)
    else:
        logger.info("Ticket %s %s applied (status=%s)", ticket_id, action, result.status)
    return result
