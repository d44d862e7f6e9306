from typing import Callable

from api.auth_api import AuthApi
from api.errors import ValidationFailure
from services.dispatcher import Dispatcher
from services.session import Session


class AuthService:
    """Login, registration and logout on top of the Session.

    The session only changes once the backend has handed out a token.
    Input problems raise ValidationFailure before anything is sent.
    """

    def __init__(self, auth_api: AuthApi, session: Session, dispatcher: Dispatcher):
        self._api = auth_api
        self._session = session
        self._dispatcher = dispatcher

    def login(
        self,
        username: str,
        password: str,
        on_done: Callable[[], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        username = username.strip()
        if not username or not password:
            raise ValidationFailure("auth.fieldsRequired")

        def logged_in(token: str):
            self._session.start(token, username)
            if on_done:
                on_done()

        self._dispatcher.submit(lambda: self._api.login(username, password), logged_in, on_error)

    def register(
        self,
        email: str,
        password: str,
        confirm_password: str,
        name: str,
        on_done: Callable[[], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        email, name = email.strip(), name.strip()
        if not email or not password or not name:
            raise ValidationFailure("auth.fieldsRequired")
        if password != confirm_password:
            raise ValidationFailure("auth.passwordMismatch")

        def registered(token: str):
            # the display name doubles as the username
            self._session.start(token, name)
            if on_done:
                on_done()

        self._dispatcher.submit(lambda: self._api.register(email, password, name), registered, on_error)

    def logout(self) -> None:
        self._session.clear()
