from typing import Optional, Protocol


class AuthUser(Protocol):
    uid: str

    def get_id_token(self) -> str:
        ...


class IdentityProvider(Protocol):
    """What the client needs from the sign-in integration."""

    @property
    def user(self) -> Optional[AuthUser]:
        ...

    @property
    def loading(self) -> bool:
        ...

    def sign_in(self) -> None:
        ...

    def sign_out(self) -> None:
        ...


class TokenUser:
    def __init__(self, uid: str, id_token: str):
        self.uid = uid
        self._id_token = id_token

    def get_id_token(self) -> str:
        return self._id_token


class StaticTokenIdentity:
    """An identity provider holding an already issued ID token, for scripts and tests."""

    def __init__(self, uid: str, id_token: str):
        self._pending = TokenUser(uid, id_token)
        self._user: Optional[TokenUser] = None
        self.loading = False

    @property
    def user(self) -> Optional[TokenUser]:
        return self._user

    def sign_in(self) -> None:
        self._user = self._pending

    def sign_out(self) -> None:
        self._user = None
