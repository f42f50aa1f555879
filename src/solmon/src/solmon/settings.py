import os
from dotenv import load_dotenv
from loguru import logger


DOTENV_PATH = os.getenv("DOTENV_PATH", ".env")
if os.path.exists(DOTENV_PATH):
    load_dotenv(dotenv_path=DOTENV_PATH)
else:
    logger.debug(f"No .env file found at {DOTENV_PATH}, using defaults/environment variables")


# RPC
RPC_URL = os.getenv("SOLMON_RPC_URL", "https://api.mainnet-beta.solana.com")

# Logging - the dashboard owns the terminal, so its logs only go to a file when one is set
LOG_LEVEL = os.getenv("SOLMON_LOG_LEVEL", "WARNING").upper()
LOG_FILE = os.getenv("SOLMON_LOG_FILE") or None

# Dashboard settings - fixed, not meant to be tuned
POLL_INTERVAL: float = 2.0  # seconds between poller cycles
INPUT_POLL_TIMEOUT: float = 0.2  # bounded keypress wait, also the minimum frame period
TPS_HISTORY_SIZE: int = 30
TOP_VALIDATOR_COUNT: int = 5
QUIT_KEY = "q"

LAMPORTS_PER_SOL = 1_000_000_000
