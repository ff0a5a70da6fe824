"""Exceptions raised while provisioning and registering sync roots."""


class ProvisioningError(Exception):
    """Base exception for sync root provisioning errors."""


class MissingParameterError(ProvisioningError):
    """Raised when a required activation parameter is absent or blank.

    Attributes:
        parameter: Name of the first missing property (e.g. "filter.roots").
    """

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"{parameter} is mandatory!")


class InvalidParameterError(ProvisioningError):
    """Raised when an activation parameter is present but cannot be used."""


class ArtifactIOError(ProvisioningError):
    """Raised when the sync root directory or one of its artifacts cannot be
    created, written, or read back."""
