from api.errors import AuthFailure, NetworkFailure, ValidationFailure
from api.http_client import ApiClient


class AuthApi:
    """Login and registration; these endpoints take no bearer token."""

    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, username: str, password: str) -> str:
        return self._token_from(
            self._post("/users/login", {"username": username, "password": password})
        )

    def register(self, email: str, password: str, name: str) -> str:
        return self._token_from(
            self._post("/users/register", {"email": email, "password": password, "name": name})
        )

    def _post(self, path: str, body: dict):
        try:
            return self._client.post(path, json=body, auth=False)
        except AuthFailure as e:
            # No session exists yet; a 401 here means bad credentials
            raise ValidationFailure("auth.invalidCredentials", e.status_code) from e

    def _token_from(self, data) -> str:
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise NetworkFailure("Malformed response from backend: missing token")
        return token
