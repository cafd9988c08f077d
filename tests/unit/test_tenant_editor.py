"""
Unit tests for tenant set editing.

add/remove treat the flag's tenants array as a set: idempotent, order
preserving, and blind to every field except tenants.
"""
import pytest

from flag_tenants.exceptions import UsageError
from flag_tenants.flags.tenant_editor import (
    TenantOperation,
    add_tenants,
    apply_operation,
    parse_tenant_ids,
    remove_tenants,
)
from flag_tenants.flags.writer import serialize_flag


def _flag(tenants):
    return {"name": "FREEMIUM_FEATURES", "comments": "c", "tenants": tenants, "status": "ENABLED"}


class TestAddTenants:
    def test_appends_new_ids_in_input_order(self):
        assert add_tenants(_flag([1]), [3, 2])["tenants"] == [1, 3, 2]

    def test_duplicates_in_input_added_once(self):
        """Adding [5, 5, 7] to [5] yields [5, 7]."""
        assert add_tenants(_flag([5]), [5, 5, 7])["tenants"] == [5, 7]

    def test_idempotent(self):
        once = add_tenants(_flag([1, 2]), [2, 3, 4])
        twice = add_tenants(once, [2, 3, 4])
        assert twice == once

    def test_missing_tenants_field(self):
        assert add_tenants({"name": "F"}, [9]) == {"name": "F", "tenants": [9]}

    def test_non_array_tenants_treated_as_empty(self):
        assert add_tenants({"name": "F", "tenants": None}, [9, 9])["tenants"] == [9]
        assert add_tenants({"name": "F", "tenants": "1,2"}, [3])["tenants"] == [3]

    def test_other_fields_untouched(self):
        flag = _flag([1])
        updated = add_tenants(flag, [2])
        assert {k: v for k, v in updated.items() if k != "tenants"} == {
            k: v for k, v in flag.items() if k != "tenants"
        }

    def test_input_not_mutated(self):
        flag = _flag([1])
        add_tenants(flag, [2])
        assert flag["tenants"] == [1]


class TestRemoveTenants:
    def test_removes_matching_ids(self):
        assert remove_tenants(_flag([1, 2, 3]), [2])["tenants"] == [1, 3]

    def test_preserves_order_of_survivors(self):
        assert remove_tenants(_flag([9, 4, 7, 1, 4]), [7])["tenants"] == [9, 4, 1, 4]

    def test_absent_id_is_not_an_error(self):
        flag = _flag([1, 2, 3])
        updated = remove_tenants(flag, [99])
        assert updated["tenants"] == [1, 2, 3]

    def test_absent_id_is_textually_identical(self):
        """Removing an ID that is not there must not look like a change."""
        flag = _flag([1, 2, 3])
        assert serialize_flag(remove_tenants(flag, [99])) == serialize_flag(flag)

    def test_idempotent(self):
        once = remove_tenants(_flag([1, 2, 3, 4]), [2, 4])
        assert remove_tenants(once, [2, 4]) == once

    def test_missing_tenants_field(self):
        assert remove_tenants({"name": "F"}, [9]) == {"name": "F", "tenants": []}

    def test_input_not_mutated(self):
        flag = _flag([1, 2])
        remove_tenants(flag, [1])
        assert flag["tenants"] == [1, 2]


@pytest.mark.parametrize(
    "tenants, ids",
    [
        ([], [1, 2]),
        ([1, 2, 3], [2, 5]),
        ([4, 4, 8], [4]),
        ([10], [10, 20, 20]),
    ],
)
def test_add_then_remove_leaves_original_minus_ids(tenants, ids):
    result = remove_tenants(add_tenants(_flag(tenants), ids), ids)
    assert result["tenants"] == [t for t in tenants if t not in ids]


class TestApplyOperation:
    def test_dispatches_add(self):
        assert apply_operation(_flag([1]), TenantOperation.ADD, [2])["tenants"] == [1, 2]

    def test_dispatches_remove(self):
        assert apply_operation(_flag([1, 2]), TenantOperation.REMOVE, [2])["tenants"] == [1]


class TestTenantOperation:
    @pytest.mark.parametrize("value", ["add", "ADD", "Add", " add "])
    def test_add_case_insensitive(self, value):
        assert TenantOperation.parse(value) is TenantOperation.ADD

    @pytest.mark.parametrize("value", ["remove", "REMOVE", "Remove"])
    def test_remove_case_insensitive(self, value):
        assert TenantOperation.parse(value) is TenantOperation.REMOVE

    @pytest.mark.parametrize("value", ["delete", "", "adds"])
    def test_unknown_function(self, value):
        with pytest.raises(UsageError, match="Unknown function"):
            TenantOperation.parse(value)


class TestParseTenantIds:
    def test_plain_list(self):
        assert parse_tenant_ids("101,202,303") == [101, 202, 303]

    def test_whitespace_tolerated(self):
        assert parse_tenant_ids("101, 202,303 ") == [101, 202, 303]

    def test_duplicates_kept(self):
        assert parse_tenant_ids("5,5,7") == [5, 5, 7]

    def test_single_id(self):
        assert parse_tenant_ids("42") == [42]

    @pytest.mark.parametrize("value", ["", "abc", "1,two,3", "1,,2", "1.5", "1_000", "2147483648", "-2147483649", ",", " , "])
    def test_invalid_entry_rejects_whole_list(self, value):
        with pytest.raises(UsageError):
            parse_tenant_ids(value)

    def test_trailing_comma_dropped(self):
        assert parse_tenant_ids("10,20,") == [10, 20]
        assert parse_tenant_ids("10,20, ,") == [10, 20]

    def test_32_bit_bounds_accepted(self):
        assert parse_tenant_ids("2147483647,-2147483648") == [2147483647, -2147483648]
