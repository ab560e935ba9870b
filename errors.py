class GenesisError(Exception):
    """Base class for every failure that aborts the genesis generation."""
    exit_code = 1


class FileReadError(GenesisError):
    exit_code = 2


class DecodeError(GenesisError):
    """Malformed JSON, missing fields or badly encoded addresses and keys."""
    exit_code = 3


class ValidationError(GenesisError):
    """Total, count or uniqueness checks over the final accounts failed."""
    exit_code = 4


class EncodeError(GenesisError):
    exit_code = 5


class WriteError(GenesisError):
    exit_code = 6
