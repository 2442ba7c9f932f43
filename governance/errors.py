"""Governance client errors."""


class GovernanceClientError(Exception):
    """Base class for errors raised by the governance client."""


class DerivationError(GovernanceClientError):
    """Seeds cannot be used to derive a program address. Not retryable."""


class RentQueryError(GovernanceClientError):
    """Could not fetch the rent exemption minimum, nothing was submitted."""


class VoteFailedError(GovernanceClientError):
    """A transaction batch of the vote operation failed to confirm."""
