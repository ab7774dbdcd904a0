"""Constants for gateway credential resolution."""

from enum import StrEnum


class SecretSource(StrEnum):
    """Where a returned secret came from."""

    PLAINTEXT = "plaintext"
    DECRYPTED = "decrypted"


DEFAULT_GATEWAY_SERVICE = "mspace"
