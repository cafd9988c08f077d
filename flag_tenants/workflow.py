"""
The tenant update workflow: login, read, edit, conditional write, logout.

Errors propagate as TenantFlagError subclasses; deciding the exit code is
left to the caller.
"""
from dataclasses import dataclass
from typing import List, Optional

from flag_tenants.client.session_manager import AuthSession, SessionManager
from flag_tenants.config.config import Config
from flag_tenants.exceptions import TenantFlagError
from flag_tenants.flags.reader import FeatureFlagReader
from flag_tenants.flags.tenant_editor import TenantOperation, apply_operation
from flag_tenants.flags.writer import FeatureFlagWriter, has_changes, serialize_flag
from flag_tenants.monitoring.logger import get_logger

logger = get_logger(__name__)


@dataclass
class WorkflowResult:
    flag_name: str
    operation: TenantOperation
    tenant_ids: List[int]
    changed: bool
    written: bool
    payload: Optional[str] = None


class TenantFlagWorkflow:
    def __init__(self, config: Config, sessions: Optional[SessionManager] = None):
        self.config = config
        self.sessions = sessions if sessions is not None else SessionManager(config.service)
        self.reader = FeatureFlagReader(self.sessions)
        self.writer = FeatureFlagWriter(self.sessions, dry_run=config.dry_run)

    def run(
        self,
        tenant_ids: List[int],
        function: str,
        email: str,
        password: str,
        flag_name: str,
    ) -> WorkflowResult:
        logger.info(
            "Starting tenant update",
            tenant_ids=tenant_ids,
            function=function,
            email=email,
            flag_name=flag_name,
            dry_run=self.config.dry_run,
        )
        session = self.sessions.login(email, password)
        try:
            result = self._update(session, tenant_ids, function, flag_name)
        except Exception:
            self._logout_after_failure(session)
            raise
        self.sessions.logout(session)
        return result

    def _update(
        self,
        session: AuthSession,
        tenant_ids: List[int],
        function: str,
        flag_name: str,
    ) -> WorkflowResult:
        original = self.reader.fetch_flag(session, flag_name)
        # Validated only now: an unknown function still reads the flag first
        operation = TenantOperation.parse(function)
        updated = apply_operation(original, operation, tenant_ids)

        changed = has_changes(original, updated)
        written = self.writer.maybe_write(original, updated, session, flag_name)
        return WorkflowResult(
            flag_name=flag_name,
            operation=operation,
            tenant_ids=list(tenant_ids),
            changed=changed,
            written=written,
            payload=serialize_flag(updated) if changed else None,
        )

    def _logout_after_failure(self, session: AuthSession) -> None:
        # The original error is what the caller needs to see
        try:
            self.sessions.logout(session)
        except TenantFlagError as e:
            logger.warning("Logout after failure did not complete", error=str(e))

    def close(self) -> None:
        self.sessions.close()
