"""
Errors raised by the credential contract. A raised error always means the whole
call was rejected and no state change is visible afterwards.
"""


class CredentialNFTError(Exception):
    pass


class BadSignature(CredentialNFTError):
    """Recovered signer is not the minter allower, or the signature is malformed."""


class ReplayedNonce(CredentialNFTError):
    """The nonce was already consumed by an earlier mint."""


class Unauthorized(CredentialNFTError):
    """Caller does not hold the role required by the operation."""


class InvalidBatchInput(CredentialNFTError):
    pass


class TransfersDisabled(CredentialNFTError):
    pass


class NullAuthority(CredentialNFTError):
    """The minter allower must not be the zero address."""


class InvalidAddress(CredentialNFTError):
    pass


class NonexistentToken(CredentialNFTError):
    pass


class NotOwnerNorApproved(CredentialNFTError):
    pass


class IncorrectOwner(CredentialNFTError):
    pass


class TokenPaused(CredentialNFTError):
    pass


class UnsafeRecipient(CredentialNFTError):
    """Receiver hook did not acknowledge a safe transfer."""


class UnknownGuild(CredentialNFTError):
    pass


class GuildLimitReached(CredentialNFTError):
    pass


class ReentrantCall(CredentialNFTError):
    """A state changing call was made while another one was being applied."""
