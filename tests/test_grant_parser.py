"""Tests for compact ACL grant parsing."""

import pytest

from storage_provisioner.errors import GrantFormatError
from storage_provisioner.models.acl import AccessControlEntry, Permission, PrincipalType
from storage_provisioner.services.grant_parser import format_grant, parse_grant


class TestParseGrant:
    def test_user_read_write(self):
        entry = parse_grant("user:alice:rw")
        assert entry == AccessControlEntry(
            principal_type=PrincipalType.USER,
            principal_name="alice",
            permissions=frozenset({Permission.READ, Permission.WRITE}),
        )

    def test_group_with_dotted_name(self):
        entry = parse_grant("group:dr.who:l")
        assert entry.principal_type is PrincipalType.GROUP
        assert entry.principal_name == "dr.who"
        assert entry.permissions == frozenset({Permission.LIST})

    def test_world_takes_empty_name(self):
        entry = parse_grant("world::r")
        assert entry.principal_type is PrincipalType.WORLD
        assert entry.principal_name == ""

    def test_duplicate_symbols_collapse(self):
        assert parse_grant("user:bob:rrw").permissions == frozenset({Permission.READ, Permission.WRITE})

    def test_all_symbols(self):
        entry = parse_grant("user:bob:rwcdlanxy")
        assert entry.permissions == frozenset(Permission)

    @pytest.mark.parametrize("grant", ["user:alice", "user", "user:alice:rw:extra", ""])
    def test_wrong_segment_count(self, grant):
        with pytest.raises(GrantFormatError, match="segments"):
            parse_grant(grant)

    def test_unknown_principal_type(self):
        with pytest.raises(GrantFormatError, match="unknown principal type 'robot'"):
            parse_grant("robot:alice:rw")

    def test_principal_type_is_case_sensitive(self):
        with pytest.raises(GrantFormatError):
            parse_grant("USER:alice:rw")

    def test_unknown_permission_symbol(self):
        with pytest.raises(GrantFormatError, match="unknown permission symbol 'z'"):
            parse_grant("user:alice:rz")

    def test_empty_permissions(self):
        with pytest.raises(GrantFormatError, match="no permissions"):
            parse_grant("user:alice:")

    def test_user_requires_name(self):
        with pytest.raises(GrantFormatError, match="principal name is required"):
            parse_grant("user::rw")

    def test_world_rejects_name(self):
        with pytest.raises(GrantFormatError, match="unexpected principal name"):
            parse_grant("world:alice:r")

    def test_error_carries_grant(self):
        with pytest.raises(GrantFormatError) as excinfo:
            parse_grant("robot:alice:rw")
        assert excinfo.value.grant == "robot:alice:rw"


class TestFormatGrant:
    def test_canonical_permission_order(self):
        assert format_grant(parse_grant("user:alice:wr")) == "user:alice:rw"

    def test_world(self):
        assert format_grant(parse_grant("world::lr")) == "world::rl"
