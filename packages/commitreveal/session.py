import logging
from dataclasses import dataclass
from typing import Any
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware
from eth_account import Account

from . import config
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Connection, signing identity and contract binding for one process."""

    w3: Web3
    account: Any
    contract: Any


def connect(
    rpc_url: str = config.JSON_RPC_PROVIDER,
    private_key: str = config.PRIVATE_KEY,
    address: str = config.CONTRACT_ADDRESS,
    abi: list | None = None,
    poa: bool = config.POA_CHAIN,
) -> Session:
    """Bind the commit-reveal contract to a signer.

    Fails immediately when the key or address is malformed or the endpoint
    is unreachable; nothing here waits or retries.
    """
    try:
        account = Account.from_key(private_key)
    except ValueError as exc:
        raise ConfigurationError(f"PRIVATE_KEY is malformed: {exc}") from exc

    try:
        contract_address = Web3.to_checksum_address(address)
    except ValueError as exc:
        raise ConfigurationError(f"CONTRACT_ADDRESS is malformed: {address}") from exc

    w3 = Web3(Web3.HTTPProvider(rpc_url))
    if poa:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    if not w3.is_connected():
        raise ConnectionError(f"JSON-RPC endpoint not reachable at {rpc_url}")

    contract = w3.eth.contract(address=contract_address, abi=abi or config.load_abi())
    logger.info(
        "connected to JSON-RPC endpoint",
        extra={"rpc_url": rpc_url, "contract": contract_address, "account": account.address},
    )
    return Session(w3=w3, account=account, contract=contract)
