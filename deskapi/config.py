from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()

@dataclass(frozen=True)
class DeskAPIConfig:
    client_id: str
    client_secret: str
    refresh_token: str
    redirect_uri: str = ""
    scope: str = "Desk.tickets.ALL,Desk.basic.READ"
    grant_type: str = "refresh_token"
    org_id: str = ""
    accounts_url: str = "https://accounts.zoho.com"
    token_slug: str = "/oauth/v2/token"
    authorization_slug: str = "/oauth/v2/auth"
    revoke_slug: str = "/oauth/v2/token/revoke"
    access_type: str = "offline"
    response_type: str = "code"
    api_base_url: str = "https://desk.zoho.com/api/v1"
    auth_scheme: str = "Zoho"
    timeout_seconds: float = 10.0

def _get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Environment variable {name} is required but not set")
    return value

def _get_timeout_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be a number, got {value!r}") from exc

def load_desk_config() -> DeskAPIConfig:
    client_id = _get_required_env("DESK_CLIENT_ID")
    client_secret = _get_required_env("DESK_CLIENT_SECRET")
    refresh_token = _get_required_env("DESK_REFRESH_TOKEN")

    defaults = DeskAPIConfig(client_id="", client_secret="", refresh_token="")

    return DeskAPIConfig(
        client_id=client_id,
        client_secret=client_secret,
        refresh_token=refresh_token,
        redirect_uri=os.getenv("DESK_REDIRECT_URI", defaults.redirect_uri),
        scope=os.getenv("DESK_SCOPE", defaults.scope),
        org_id=os.getenv("DESK_ORG_ID", defaults.org_id),
        accounts_url=os.getenv("DESK_ACCOUNTS_URL", defaults.accounts_url),
        api_base_url=os.getenv("DESK_API_BASE_URL", defaults.api_base_url),
        timeout_seconds=_get_timeout_env("DESK_TIMEOUT_SECONDS", defaults.timeout_seconds),
    )
