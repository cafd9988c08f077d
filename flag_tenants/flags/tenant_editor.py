"""
Tenant set editing for feature flags.

The `tenants` array of a flag has set semantics: add appends only values
not already present, remove filters values out. Both leave every other field
of the flag untouched and never mutate their input.
"""
import re
from enum import Enum
from typing import Any, Dict, Iterable, List

from flag_tenants.constants import TENANT_ID_MAX, TENANT_ID_MIN, TENANTS_FIELD
from flag_tenants.exceptions import UsageError

_TENANT_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class TenantOperation(str, Enum):
    ADD = "add"
    REMOVE = "remove"

    @classmethod
    def parse(cls, value: str) -> "TenantOperation":
        """Case-insensitive lookup; unknown names are a usage error."""
        normalized = (value or "").strip().lower()
        for op in cls:
            if op.value == normalized:
                return op
        raise UsageError(f"Unknown function: {value}")


def parse_tenant_ids(tenant_ids_input: str) -> List[int]:
    """
    Parse a comma-separated tenant ID list such as "101, 202,303".

    Trailing blank entries ("10,20,") are dropped. Every other entry must be
    a plain decimal integer within the signed 32-bit range; a single bad entry
    invalidates the whole list.

    Raises:
        UsageError: If any entry is not a valid tenant ID or the list is empty
    """
    parts = [part.strip() for part in (tenant_ids_input or "").split(",")]
    while parts and not parts[-1]:
        parts.pop()

    tenant_ids = []
    for part in parts:
        if not _TENANT_ID_PATTERN.fullmatch(part) or not TENANT_ID_MIN <= int(part) <= TENANT_ID_MAX:
            raise UsageError(f"Tenant IDs list is empty or invalid: {tenant_ids_input!r}")
        tenant_ids.append(int(part))
    if not tenant_ids:
        raise UsageError("Tenant IDs list is empty or invalid")
    return tenant_ids


def extract_tenants(flag: Dict[str, Any]) -> List[Any]:
    """Copy of the flag's tenants array, or [] when missing or not an array."""
    tenants = flag.get(TENANTS_FIELD)
    return list(tenants) if isinstance(tenants, list) else []


def _with_tenants(flag: Dict[str, Any], tenants: List[Any]) -> Dict[str, Any]:
    updated = dict(flag)
    updated[TENANTS_FIELD] = tenants
    return updated


def add_tenants(flag: Dict[str, Any], tenant_ids: Iterable[int]) -> Dict[str, Any]:
    tenants = extract_tenants(flag)
    for tenant_id in tenant_ids:
        if tenant_id not in tenants:
            tenants.append(tenant_id)
    return _with_tenants(flag, tenants)


def remove_tenants(flag: Dict[str, Any], tenant_ids: Iterable[int]) -> Dict[str, Any]:
    to_remove = list(tenant_ids)
    tenants = [t for t in extract_tenants(flag) if t not in to_remove]
    return _with_tenants(flag, tenants)


def apply_operation(flag: Dict[str, Any], operation: TenantOperation, tenant_ids: Iterable[int]) -> Dict[str, Any]:
    if operation is TenantOperation.ADD:
        return add_tenants(flag, tenant_ids)
    return remove_tenants(flag, tenant_ids)
