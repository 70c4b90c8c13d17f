"""Errors raised by the provisioning pipeline.

Filesystem failures are not wrapped: they surface as the builtin OSError.
"""


class ProvisionError(Exception):
    """Base class for fatal provisioning failures."""


class ConfigError(ProvisionError):
    """Required configuration is missing or malformed."""


class FetchError(ProvisionError):
    """A remote resource could not be downloaded."""


class ExtractError(ProvisionError):
    """The setup archive could not be decompressed or unpacked."""
