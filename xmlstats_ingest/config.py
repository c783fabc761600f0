"""Environment configuration for the xmlstats API client.

Connection settings are read from the environment at call time:
    XMLSTATS_URL          base URL (defaults to https://erikberg.com/)
    XMLSTATS_BEARERTOKEN  access token from the xmlstats registration
    XMLSTATS_USERAGENT    user agent naming your website or email address
"""

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://erikberg.com/"

# Source label stamped on every decoded top-level record
EXTRACTION_SOURCE = "xmlstats"


def get_base_url() -> str:
    """Get the API base URL, always ending with a slash."""
    base_url = os.environ.get("XMLSTATS_URL")
    if not base_url:
        logger.warning(f"XMLSTATS_URL not found, using default {DEFAULT_BASE_URL}")
        base_url = DEFAULT_BASE_URL
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url


def get_bearer_token() -> str:
    """Get the bearer token, or an empty string when it is not configured."""
    token = os.environ.get("XMLSTATS_BEARERTOKEN")
    if token is None:
        logger.warning(
            "XMLSTATS_BEARERTOKEN not found, you should get your token from xmlstats registration"
        )
        return ""
    return token


def get_user_agent() -> str:
    """Get the user agent, or an empty string when it is not configured."""
    agent = os.environ.get("XMLSTATS_USERAGENT")
    if agent is None:
        logger.warning(
            "XMLSTATS_USERAGENT not found, should include your website or email credential"
        )
        return ""
    return agent
