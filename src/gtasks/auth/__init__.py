"""Credential suppliers and OAuth2 helpers."""

from .credentials import (
    StaticTokenSupplier, GoogleCredentialsSupplier, save_token_to_file, report_token_data
)
from .oauth import get_credentials_from_file, get_credentials_from_info

__all__ = [
    "StaticTokenSupplier",
    "GoogleCredentialsSupplier",
    "save_token_to_file",
    "report_token_data",
    "get_credentials_from_file",
    "get_credentials_from_info",
]
