from typing import Dict, Iterable, Optional, Protocol


class ICredentialStore(Protocol):
    def get_password(self, username: str) -> Optional[str]: ...

    def set_password(self, username: str, password: str) -> None: ...

    def remove(self, username: str) -> None: ...

    def usernames(self) -> Iterable[str]: ...

    def clear(self) -> None: ...


class IUsernameRegistry(Protocol):
    def contains(self, username: str) -> bool: ...

    def add(self, username: str) -> None: ...


class InMemoryCredentialStore:
    """Dictionary backed username -> password store. Lookups are case-sensitive."""

    def __init__(self, credentials: Optional[Dict[str, str]] = None):
        self._credentials: Dict[str, str] = dict(credentials or {})

    def get_password(self, username: str) -> Optional[str]:
        return self._credentials.get(username)

    def set_password(self, username: str, password: str) -> None:
        self._credentials[username] = password

    def remove(self, username: str) -> None:
        self._credentials.pop(username, None)

    def usernames(self) -> Iterable[str]:
        return list(self._credentials.keys())

    def clear(self) -> None:
        self._credentials.clear()

    def __contains__(self, username: str) -> bool:
        return username in self._credentials

    def __len__(self) -> int:
        return len(self._credentials)


class InMemoryUsernameRegistry:
    """Set of taken usernames, compared case-insensitively."""

    def __init__(self, usernames: Optional[Iterable[str]] = None):
        self._taken = set()
        for username in usernames or ():
            self.add(username)

    def contains(self, username: str) -> bool:
        return username.casefold() in self._taken

    def add(self, username: str) -> None:
        self._taken.add(username.casefold())

    def __len__(self) -> int:
        return len(self._taken)
