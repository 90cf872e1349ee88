"""Interface to the external identity (registration) service."""

from abc import ABC, abstractmethod

from tickets.domain import HolderId


class IdentityServiceError(Exception):
    """The identity service could not give a definite answer."""


class IdentityVerifier(ABC):
    """Confirms that a holder identifier belongs to a registered person."""

    @abstractmethod
    def exists(self, holder_id: HolderId) -> bool:
        """Return True if the identity exists, False if it definitely does not.

        Raises:
            IdentityServiceError: If the service is unreachable, times out or
                answers with anything other than found / not found.
        """
        ...
