"""Credential lookup for token-deploy."""

import os
from typing import Mapping, Optional, Protocol


class CredentialProvider(Protocol):
    """Anything that can look up a secret by name."""

    def get(self, name: str) -> Optional[str]: ...


class EnvironmentCredentials:
    """Reads credentials from the process environment."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> Optional[str]:
        # Empty values count as unset
        return self._environ.get(name) or None


class StaticCredentials:
    """Fixed set of credentials, e.g. taken from settings."""

    def __init__(self, values: Optional[Mapping[str, Optional[str]]] = None):
        self._values = dict(values or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name) or None
