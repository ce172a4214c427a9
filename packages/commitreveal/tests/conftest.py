import os
import sys
from unittest.mock import MagicMock

import pytest

# allow "commitreveal" imports without an install
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from commitreveal.session import Session

ACCOUNT_ADDRESS = "0x" + "1" * 40
TX_HASH = b"\xcc" * 32


def make_entry(args: dict, block: int, log_index: int) -> dict:
    return {"args": args, "blockNumber": block, "logIndex": log_index}


@pytest.fixture
def mock_receipt():
    receipt = MagicMock()
    receipt.status = 1
    receipt.blockNumber = 123
    return receipt


@pytest.fixture
def mock_session(mock_receipt):
    """A Session whose web3, account and contract are all mocks."""
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.chain_id = 31337
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = mock_receipt
    w3.to_wei.side_effect = lambda value, unit: int(float(value) * 10**9)

    account = MagicMock()
    account.address = ACCOUNT_ADDRESS
    account.sign_transaction.return_value = MagicMock(raw_transaction=b"\x01\x02")

    contract = MagicMock()
    contract.functions.getWinner().call.return_value = "YES"
    contract.functions.getVoteCommitsArray().call.return_value = [b"\xaa" * 32, b"\xbb" * 32]

    return Session(w3=w3, account=account, contract=contract)
