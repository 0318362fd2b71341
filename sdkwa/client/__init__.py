from .config import ClientConfig
from .sdkwa_client import SDKWAClient, SDKWAFormDataBuilder, SDKWAUrlBuilder, open_client

__all__ = [
    "ClientConfig",
    "SDKWAClient",
    "SDKWAFormDataBuilder",
    "SDKWAUrlBuilder",
    "open_client",
]
