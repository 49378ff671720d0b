from abc import ABC, abstractmethod


class Authorizer(ABC):
    """Contract every credential provider must implement."""

    @abstractmethod
    def obtain_credential(self):
        """Return a credential that is valid for API calls, prompting for consent if needed."""

    @abstractmethod
    def refresh_credential(self, credential):
        """Exchange the credential's refresh token for a new access token."""
