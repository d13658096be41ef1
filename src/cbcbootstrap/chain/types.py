"""CBC chain identity and endpoint helpers."""

from dataclasses import dataclass

from cbcbootstrap import config


@dataclass
class CBCRuntimeConfig:
    """Settings for one CBC runtime initializer.

    Attributes:
        chain_name: Chain name used in log lines
        ws_endpoint: Node WebSocket endpoint as configured
        http_endpoint: HTTP endpoint used for JSON-RPC calls
        enable_finality_check: Run the finality check after bootstrap
        retries: Attempts per fetch operation
        retry_wait: Seconds between attempts
        request_timeout: Per-call RPC timeout in seconds
    """

    chain_name: str
    ws_endpoint: str
    http_endpoint: str
    enable_finality_check: bool = True
    retries: int = config.FETCH_RETRIES
    retry_wait: float = config.FETCH_RETRY_WAIT_SECONDS
    request_timeout: float = config.RPC_TIMEOUT_SECONDS


def default_cbc_config(ws_endpoint: str) -> CBCRuntimeConfig:
    """Build the default CBC configuration for a node endpoint."""
    return CBCRuntimeConfig(
        chain_name=config.CBC_CHAIN_NAME,
        ws_endpoint=ws_endpoint,
        http_endpoint=convert_ws_to_http(ws_endpoint),
        enable_finality_check=config.ENABLE_FINALITY_CHECK,
    )


def convert_ws_to_http(endpoint: str) -> str:
    """Translate a WebSocket endpoint to its HTTP counterpart.

    ws:// becomes http://, wss:// becomes https://, anything else is
    returned unchanged.
    """
    if endpoint.startswith("ws://"):
        return "http://" + endpoint[len("ws://"):]
    if endpoint.startswith("wss://"):
        return "https://" + endpoint[len("wss://"):]
    return endpoint


def is_cbc_network(network_name: str) -> bool:
    """Check whether a configured network name selects the CBC chain.

    Matches case-insensitively on the known names, or on the keyword
    appearing anywhere in the name (e.g. "cbc-testnet").
    """
    name = network_name.lower()
    return name in config.CBC_NETWORK_NAMES or config.CBC_NETWORK_KEYWORD in name


def is_cbc_pallet(pallet_name: str) -> bool:
    """Check if a pallet name is one of the CBC-specific pallets."""
    return pallet_name in config.CBC_PALLET_NAMES
