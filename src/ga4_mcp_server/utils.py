"""
Utility functions for the GA4 MCP Server.

Contains common utilities for authentication, client bootstrapping and
argument normalization.
"""

import json
import logging
from typing import List, Optional, Union

import google.auth
from google.oauth2 import service_account
from google.analytics.data_v1beta import BetaAnalyticsDataClient

from .config import READONLY_SCOPE, Settings

# Configure logging
logger = logging.getLogger(__name__)

# Global client instance and the settings it was built from
analytics_client: Optional[BetaAnalyticsDataClient] = None
settings: Settings = Settings()


def build_credentials(config: Settings):
    """Return credentials for the Data API.

    Explicit service account fields take precedence; otherwise Application
    Default Credentials are used, which honour GOOGLE_APPLICATION_CREDENTIALS.
    """
    if config.has_service_account:
        credentials_info = {
            "type": "service_account",
            "client_email": config.client_email,
            "private_key": config.private_key,
            "private_key_id": "",
            "client_id": "",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs"
        }
        return service_account.Credentials.from_service_account_info(
            credentials_info, scopes=[READONLY_SCOPE]
        )

    credentials, _ = google.auth.default(scopes=[READONLY_SCOPE])
    return credentials


def initialize_client(config: Settings):
    """Initialize the Google Analytics Data client for the given settings."""
    global analytics_client, settings

    try:
        credentials = build_credentials(config)
        analytics_client = BetaAnalyticsDataClient(credentials=credentials)
        settings = config

        if not config.default_property_id:
            logger.warning(
                "GA_PROPERTY_ID is not set; every call must pass propertyId"
            )
        logger.info("Google Analytics client initialized successfully")

    except Exception as e:
        logger.error(f"Failed to initialize Google Analytics client: {e}")
        raise


def format_property_id(property_id: str) -> str:
    """Format property ID for API calls."""
    if property_id.startswith("properties/"):
        return property_id
    return f"properties/{property_id}"


def preprocess_list_param(param: Union[List[str], str, None]) -> Optional[List[str]]:
    """
    Preprocess a parameter that should be a list but might come as a JSON string.

    Args:
        param: The parameter that might be a list, JSON string, or None

    Returns:
        A proper list or None
    """
    if param is None:
        return None

    if isinstance(param, list):
        return param

    if isinstance(param, str):
        try:
            parsed = json.loads(param)
            if isinstance(parsed, list):
                return [str(item) for item in parsed]
            # A single string value is wrapped in a list
            return [parsed if isinstance(parsed, str) else param]
        except json.JSONDecodeError:
            return [param]

    return None
