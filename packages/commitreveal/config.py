import os
import json
import logging
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# --- Configuration ---
JSON_RPC_PROVIDER = os.getenv("JSON_RPC_PROVIDER", "http://127.0.0.1:8545")
# Hardhat's first default account, funded out of the box on a local node
PRIVATE_KEY = os.getenv(
    "PRIVATE_KEY",
    "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80",
)
CONTRACT_ADDRESS = os.getenv("CONTRACT_ADDRESS", "0x5FbDB2315678afecb367f032d93F642f64180aa3")
ABI_PATH = os.getenv("COMMIT_REVEAL_ABI", "artifacts/contracts/CommitReveal.sol/CommitReveal.json")
POA_CHAIN = os.getenv("POA_CHAIN", "false").lower() in ("1", "true")
GAS_PRICE_GWEI = os.getenv("GAS_PRICE_GWEI")
EVENT_POLL_INTERVAL_S = float(os.getenv("EVENT_POLL_INTERVAL", "2"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
SENTRY_DSN = os.getenv("SENTRY_DSN")

# minimal ABI for the calls and events the client touches
FALLBACK_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "_voteCommit", "type": "bytes32"}],
        "name": "commitVote", "outputs": [], "stateMutability": "nonpayable", "type": "function",
    },
    {
        "inputs": [
            {"internalType": "string", "name": "_vote", "type": "string"},
            {"internalType": "bytes32", "name": "_voteCommit", "type": "bytes32"},
        ],
        "name": "revealVote", "outputs": [], "stateMutability": "nonpayable", "type": "function",
    },
    {
        "inputs": [],
        "name": "getWinner",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view", "type": "function",
    },
    {
        "inputs": [],
        "name": "getVoteCommitsArray",
        "outputs": [{"internalType": "bytes32[]", "name": "", "type": "bytes32[]"}],
        "stateMutability": "view", "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [{"indexed": False, "internalType": "bytes32", "name": "voteCommit", "type": "bytes32"}],
        "name": "NewVoteCommit", "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": False, "internalType": "bytes32", "name": "voteCommit", "type": "bytes32"},
            {"indexed": False, "internalType": "string", "name": "choice", "type": "string"},
        ],
        "name": "NewVoteReveal", "type": "event",
    },
]


def load_abi(path: str | os.PathLike = ABI_PATH) -> list:
    """Load the contract ABI from a Hardhat/Foundry build artifact.

    Falls back to ``FALLBACK_ABI`` when the artifact is missing or carries
    no ``abi`` entry.
    """
    file = Path(path)
    if not file.exists():
        logger.warning("ABI artifact not found; using built-in ABI", extra={"path": str(file)})
        return FALLBACK_ABI
    data = json.loads(file.read_text())
    if isinstance(data, list):
        return data
    abi = data.get("abi") or []
    if not abi:
        logger.warning("ABI artifact has no 'abi' entry; using built-in ABI", extra={"path": str(file)})
        return FALLBACK_ABI
    return abi
