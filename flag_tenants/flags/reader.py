"""
Feature flag lookup.

Fetches the full flag list from the super-admin endpoint and projects the
named flag onto the fields the editor works with.
"""
from typing import Any, Dict, List

import requests

from flag_tenants.client.session_manager import AuthSession, SessionManager, is_success
from flag_tenants.constants import FEATURE_FLAG_FIELDS
from flag_tenants.exceptions import FlagNotFoundError, NetworkError, ParseError
from flag_tenants.monitoring.logger import get_logger

logger = get_logger(__name__)


def project_flag(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Keep exactly FEATURE_FLAG_FIELDS, in order, with None for anything missing."""
    return {name: raw.get(name) for name in FEATURE_FLAG_FIELDS}


def find_flag(flags: List[Any], flag_name: str) -> Dict[str, Any]:
    """First flag whose name matches exactly (case-sensitive)."""
    for flag in flags:
        if isinstance(flag, dict) and flag.get("name") == flag_name:
            return flag
    raise FlagNotFoundError(flag_name)


class FeatureFlagReader:
    def __init__(self, sessions: SessionManager):
        self.sessions = sessions

    def fetch_flags(self, session: AuthSession) -> List[Any]:
        service = self.sessions.service
        url = service.url(service.feature_flag_endpoint)
        try:
            response = self.sessions.http.get(url, **self.sessions.auth_kwargs(session))
        except requests.RequestException as e:
            logger.error("Exception during fetching feature flags", url=url, error=str(e))
            raise NetworkError(f"Exception during fetching feature flags: {e}") from e

        if not is_success(response):
            logger.error(
                "Failed to fetch the feature flag details",
                status_code=response.status_code,
                body=response.text,
            )
            raise NetworkError(
                "Failed to fetch the feature flag details",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            flags = response.json()
        except ValueError as e:
            raise ParseError("Feature flag response is not valid JSON") from e
        if not isinstance(flags, list):
            raise ParseError(f"Expected a JSON array of feature flags, got {type(flags).__name__}")

        logger.debug("Fetched feature flags", status_code=response.status_code, count=len(flags))
        return flags

    def fetch_flag(self, session: AuthSession, flag_name: str) -> Dict[str, Any]:
        """
        Fetch and project a single flag.

        Raises:
            NetworkError: Non-success status or transport failure
            ParseError: Body is not a JSON array
            FlagNotFoundError: No flag with that name
        """
        flags = self.fetch_flags(session)
        try:
            flag = project_flag(find_flag(flags, flag_name))
        except FlagNotFoundError:
            logger.error("Feature flag not found", flag_name=flag_name, available=len(flags))
            raise
        logger.info("Fetched feature flag", flag_name=flag_name, tenants=flag["tenants"])
        return flag
