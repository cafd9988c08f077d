"""
Change detection and write-back for feature flags.
"""
import json
from typing import Any, Dict

import requests

from flag_tenants.client.session_manager import AuthSession, SessionManager, is_success
from flag_tenants.constants import TENANTS_FIELD
from flag_tenants.exceptions import NetworkError
from flag_tenants.flags.tenant_editor import extract_tenants
from flag_tenants.monitoring.logger import get_logger

logger = get_logger(__name__)


def serialize_flag(flag: Dict[str, Any]) -> str:
    # Compact, key order kept, None emitted as null: equal flags give equal text
    return json.dumps(flag, separators=(",", ":"))


def _comparable(flag: Dict[str, Any]) -> str:
    # A missing or null tenants array means the same as []
    return serialize_flag({**flag, TENANTS_FIELD: extract_tenants(flag)})


def has_changes(original: Dict[str, Any], updated: Dict[str, Any]) -> bool:
    return _comparable(original) != _comparable(updated)


class FeatureFlagWriter:
    """Issues the PUT only when the edit changed the flag."""

    def __init__(self, sessions: SessionManager, dry_run: bool = False):
        self.sessions = sessions
        self.dry_run = dry_run

    def maybe_write(
        self,
        original: Dict[str, Any],
        updated: Dict[str, Any],
        session: AuthSession,
        flag_name: str,
    ) -> bool:
        """
        Send `updated` if it differs from `original`.

        Returns:
            True if a PUT was issued
        """
        if not has_changes(original, updated):
            logger.info("No changes in the feature flag payload. Skipping API call.", flag_name=flag_name)
            return False

        payload = serialize_flag(updated)
        if self.dry_run:
            logger.info("Dry run: feature flag payload not sent", flag_name=flag_name, payload=payload)
            return False

        self.send_payload(payload, session, flag_name)
        return True

    def send_payload(self, payload: str, session: AuthSession, flag_name: str) -> None:
        service = self.sessions.service
        url = service.url(service.feature_flag_endpoint)
        kwargs = self.sessions.auth_kwargs(session)
        kwargs["headers"]["Content-Type"] = "application/json"
        try:
            response = self.sessions.http.put(url, data=payload, **kwargs)
        except requests.RequestException as e:
            logger.error("Exception during sending feature flag payload", url=url, error=str(e))
            raise NetworkError(f"Exception during sending feature flag payload: {e}") from e

        if not is_success(response):
            logger.error(
                "Failed to send the feature flag payload",
                flag_name=flag_name,
                status_code=response.status_code,
                body=response.text,
            )
            raise NetworkError(
                "Failed to send the feature flag payload",
                status_code=response.status_code,
                body=response.text,
            )

        logger.info(
            "Successfully sent the feature flag payload",
            flag_name=flag_name,
            status_code=response.status_code,
            payload=payload,
        )
