from web3.exceptions import ContractLogicError

REVERT_PREFIX = "execution reverted: "


class CommitRevealError(Exception):
    """Base class for errors raised by the voting client."""


class ConfigurationError(CommitRevealError):
    pass


class InvalidChoice(CommitRevealError, ValueError):
    def __init__(self, message: str = "Only YES or NO options are permitted"):
        super().__init__(message)


class TransactionReverted(CommitRevealError):
    """A transaction was mined but the contract reverted it."""

    def __init__(self, tx_hash: str):
        self.tx_hash = tx_hash
        super().__init__(f"transaction {tx_hash} reverted")


def error_reason(exc: BaseException) -> str:
    """Human-readable reason for a failed remote call."""
    if isinstance(exc, ContractLogicError):
        message = getattr(exc, "message", None) or str(exc)
        return message.removeprefix(REVERT_PREFIX)
    return str(exc)
