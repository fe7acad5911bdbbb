from abc import ABC, abstractmethod


class AuthContextPort(ABC):
    @abstractmethod
    def authorization_headers(self) -> dict[str, str]:
        """Headers that authenticate a collaborator call for the current user."""
        raise NotImplementedError

    @abstractmethod
    def user_id(self) -> str | None:
        raise NotImplementedError
