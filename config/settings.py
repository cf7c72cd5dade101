import os
from dotenv import load_dotenv

# Load Environment Variables from project root .env
env_path = os.path.join(os.path.dirname(__file__), "../.env")
load_dotenv(env_path)


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Settings:
    # ═══════════════════════════════════════════════════════════════════
    # CONSOLE
    # ═══════════════════════════════════════════════════════════════════
    SILENT_MODE = os.getenv("SILENT_MODE", "false").lower() == "true"

    # ═══════════════════════════════════════════════════════════════════
    # ENDPOINTS
    # ═══════════════════════════════════════════════════════════════════
    RPC_URL = os.getenv("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com")
    JUPITER_API_URL = os.getenv("JUPITER_API_URL", "https://quote-api.jup.ag/v6")
    JITO_REGION = os.getenv("JITO_REGION", "mainnet")
    JITO_BUNDLE_URL = os.getenv("JITO_BUNDLE_URL", "")  # Overrides JITO_REGION when set
    HTTP_TIMEOUT_SEC = _env_float("HTTP_TIMEOUT_SEC", 30.0)

    # Wallet (JSON byte array or base58 secret key)
    WALLET_PRIVATE_KEY = os.getenv("WALLET_PRIVATE_KEY", "")

    # Well-known mints
    WSOL_MINT = "So11111111111111111111111111111111111111112"
    USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

    # ═══════════════════════════════════════════════════════════════════
    # SWAP DEFAULTS
    # ═══════════════════════════════════════════════════════════════════
    DEFAULT_SLIPPAGE_BPS = 100  # 1% initial slippage
    DEFAULT_MAX_RETRIES = 5
    SLIPPAGE_ESCALATION = _env_float("SLIPPAGE_ESCALATION", 0.5)  # +50% of base per failed attempt
    MAX_SLIPPAGE_BPS = 10_000
    OUTER_RETRY_DELAY_SEC = _env_float("OUTER_RETRY_DELAY_SEC", 2.0)

    # ═══════════════════════════════════════════════════════════════════
    # SIMULATION
    # ═══════════════════════════════════════════════════════════════════
    SIMULATION_MAX_RETRIES = _env_int("SIMULATION_MAX_RETRIES", 5)
    SIMULATION_FALLBACK_RETRIES = _env_int("SIMULATION_FALLBACK_RETRIES", 3)  # Without lookup tables
    SIMULATION_RETRY_DELAY_SEC = _env_float("SIMULATION_RETRY_DELAY_SEC", 1.0)
    COMPUTE_UNIT_MARGIN_PCT = _env_int("COMPUTE_UNIT_MARGIN_PCT", 20)  # 1.2x units consumed

    # ═══════════════════════════════════════════════════════════════════
    # PRIORITY FEES
    # ═══════════════════════════════════════════════════════════════════
    PRIORITY_FEE_SAMPLE_SIZE = 150  # Last 150 slots
    DEFAULT_PRIORITY_FEE_MICRO_LAMPORTS = 10_000
    DEFAULT_PRIORITY_FEE_SOL = 0.00001

    # ═══════════════════════════════════════════════════════════════════
    # JITO BUNDLES
    # ═══════════════════════════════════════════════════════════════════
    BUNDLE_POLL_CYCLES = _env_int("BUNDLE_POLL_CYCLES", 3)
    BUNDLE_POLL_INTERVAL_SEC = _env_float("BUNDLE_POLL_INTERVAL_SEC", 15.0)
    JITO_TIP_LAMPORTS = _env_int("JITO_TIP_LAMPORTS", 10_000)  # 0 disables the tip transaction
