from typing import Literal
from pydantic import BaseModel
from web3 import Web3

from .errors import InvalidChoice

CHOICES = {"YES": 1, "NO": 2}


def parse_choice(text: str) -> int:
    """Map YES/NO (any case) to the contract's choice number."""
    choice = text.strip().upper()
    if choice not in CHOICES:
        raise InvalidChoice()
    return CHOICES[choice]


def commitment_digest(vote: str) -> bytes:
    """keccak256 over the UTF-8 bytes of ``vote``."""
    return Web3.keccak(text=vote)


class VoteIntent(BaseModel):
    choice: Literal[1, 2]
    secret: str

    @property
    def payload(self) -> str:
        return f"{self.choice}~{self.secret}"

    @property
    def commitment(self) -> bytes:
        return commitment_digest(self.payload)
