import logging
from deskapi.application.desk_services import DirectoryService, TokenService
from deskapi.config import load_desk_config
from deskapi.domain.results import Succeeded
from deskapi.infrastructure.desk_client import DeskClient


logger = logging.getLogger(__name__)

def logging_conf() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def main() -> None:
    logging_conf()

    config = load_desk_config()
    client = DeskClient(config)

    # access token
    token_outcome = TokenService(client).access_token()
    if not isinstance(token_outcome, Succeeded):
        logger.error("Failed to obtain Desk access token: %s", token_outcome)
        raise SystemExit(1)
    access_token = token_outcome.value.access_token

    directory = DirectoryService(client)

    # organization
    org_outcome = directory.organization(access_token)
    if not isinstance(org_outcome, Succeeded):
        logger.error("Failed to resolve Desk organization: %s", org_outcome)
        raise SystemExit(1)
    logger.info("Organization id=%s", org_outcome.value)

    # departments
    departments_outcome = directory.departments(access_token)
    if not isinstance(departments_outcome, Succeeded):
        logger.error("Failed to load Desk departments: %s", departments_outcome)
        raise SystemExit(1)

    # print first few items
    for department in departments_outcome.value[:5]:
        logger.info("Department ID=%s name=%r enabled=%s", department.id, department.name, department.is_enabled)


if __name__ == "__main__":
    main()
