class AuthStore:
    def __init__(self) -> None:
        self._token: str | None = None

    def set_token(self, token: str) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token

    def clear(self) -> None:
        self._token = None
