"""
Utility modules for the Dwolla client
"""
from .config_loader import ClientConfig, load_client_config

__all__ = [
    'ClientConfig',
    'load_client_config',
]
