from dataclasses import dataclass

from config.settings import Settings


@dataclass(frozen=True)
class InfrastructureConfig:
    rpc_url: str = Settings.RPC_URL
    jupiter_api_url: str = Settings.JUPITER_API_URL
    jito_region: str = Settings.JITO_REGION
    jito_bundle_url: str = Settings.JITO_BUNDLE_URL  # Empty = regional endpoints
    http_timeout_sec: float = Settings.HTTP_TIMEOUT_SEC
    wallet_private_key: str = Settings.WALLET_PRIVATE_KEY
