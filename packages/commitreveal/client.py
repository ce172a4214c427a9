import logging
from web3 import Web3

from . import config
from .commitment import VoteIntent
from .errors import TransactionReverted
from .session import Session

logger = logging.getLogger(__name__)


class VotingClient:
    """Thin wrapper over the commit-reveal contract's calls."""

    def __init__(self, session: Session, gas_price_gwei: str | None = config.GAS_PRICE_GWEI):
        self.session = session
        self.gas_price_gwei = gas_price_gwei

    @property
    def contract(self):
        return self.session.contract

    def _transact(self, fn):
        """Sign, submit and wait for ``fn``; raise if the receipt reverted."""
        w3 = self.session.w3
        acct = self.session.account
        params = {
            "from": acct.address,
            "nonce": w3.eth.get_transaction_count(acct.address),
            "chainId": w3.eth.chain_id,
        }
        if self.gas_price_gwei:
            params["gasPrice"] = w3.to_wei(self.gas_price_gwei, "gwei")
        tx = fn.build_transaction(params)
        signed = acct.sign_transaction(tx)
        txh = w3.eth.send_raw_transaction(signed.raw_transaction)
        tx_hash = Web3.to_hex(txh)
        logger.info("submitted transaction", extra={"tx_hash": tx_hash})
        rcpt = w3.eth.wait_for_transaction_receipt(txh)
        if rcpt.status == 0:
            raise TransactionReverted(tx_hash)
        logger.info("transaction confirmed", extra={"tx_hash": tx_hash, "block": rcpt.blockNumber})
        return rcpt

    def commit_vote(self, intent: VoteIntent):
        return self._transact(self.contract.functions.commitVote(intent.commitment))

    def reveal_vote(self, intent: VoteIntent):
        # the plaintext vote goes on-chain so the contract can recompute the hash
        return self._transact(self.contract.functions.revealVote(intent.payload, intent.commitment))

    def get_winner(self):
        return self.contract.functions.getWinner().call()

    def get_vote_commits(self) -> list[str]:
        commits = self.contract.functions.getVoteCommitsArray().call()
        return [Web3.to_hex(c) for c in commits]
