"""Request-scoped authentication state."""

from dataclasses import dataclass

from domain.model.user import User


@dataclass(frozen=True)
class AuthenticationContext:
    """Outcome of resolving the caller of a single request.

    Built fresh for every request and never stored or shared.
    """
    is_authenticated: bool = False
    principal: User | None = None

    @staticmethod
    def anonymous() -> 'AuthenticationContext':
        return AuthenticationContext(is_authenticated=False, principal=None)

    @staticmethod
    def for_user(user: User) -> 'AuthenticationContext':
        return AuthenticationContext(is_authenticated=True, principal=user)
