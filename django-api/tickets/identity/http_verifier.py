import logging

import httpx
from httpx import RequestError

from tickets.domain import HolderId
from tickets.identity.interfaces import IdentityServiceError, IdentityVerifier

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_PATH = "/Cadastro/{holder_id}"


class HttpIdentityVerifier(IdentityVerifier):
    """Looks holders up through the access gateway.

    A 200 means the holder exists and a 404 means it does not. Every other
    status, and any transport failure, is reported as IdentityServiceError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        lookup_path: str = DEFAULT_LOOKUP_PATH,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url
        self.lookup_path = lookup_path
        self.session = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def exists(self, holder_id: HolderId) -> bool:
        path = self.lookup_path.format(holder_id=holder_id.value)
        try:
            resp = self.session.get(path)
        except RequestError as e:
            logger.warning("Identity service unreachable for holder %s: %s", holder_id, e)
            raise IdentityServiceError("Network unreachable when verifying holder") from e

        if resp.status_code == httpx.codes.OK:
            return True
        if resp.status_code == httpx.codes.NOT_FOUND:
            return False

        logger.warning(
            "Identity service answered %s for holder %s", resp.status_code, holder_id
        )
        raise IdentityServiceError(f"Unexpected identity service status: {resp.status_code}")

    def close(self) -> None:
        self.session.close()
