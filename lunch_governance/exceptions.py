"""
Service exceptions.

Advisory failures are not exceptions: the advisory client reports them as
values and the risk assessor falls back to the rule engine. Only input
problems and unexpected faults reach the HTTP layer.
"""


class LunchGovernanceError(Exception):
    """Base class for service errors."""


class ClientInputError(LunchGovernanceError):
    """Malformed pipeline request (HTTP 400)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CredentialError(LunchGovernanceError):
    """The advisory credential could not be obtained."""
