"""Tests for the role and permission gates."""

import pytest

from outreach.core.rbac.guards import check_permissions, check_roles
from outreach.core.rbac.permissions import Permission
from outreach.core.rbac.principal import Principal
from outreach.core.rbac.roles import Role
from outreach.core.rbac.rules import AllOf, AnyOf, RoleRequirement, all_of, any_of


class TestRoleGate:
    """Test check_roles."""

    def test_no_required_roles_allows(self):
        assert check_roles(None, None)
        assert check_roles([], None)
        assert check_roles(None, Principal(role=None))
        assert check_roles(RoleRequirement([]), {"role": None})

    def test_missing_principal_denies(self):
        assert not check_roles([Role.VIEWER], None)

    def test_missing_role_denies(self):
        assert not check_roles([Role.VIEWER], Principal(email="a@example.com"))
        assert not check_roles([Role.VIEWER], {"role": ""})

    def test_any_required_role_at_or_below_rank_allows(self):
        # ops (50) against viewer (10) and admin (100)
        assert check_roles([Role.VIEWER, Role.ADMIN], Principal(role="ops"))

    def test_below_every_required_rank_denies(self):
        # viewer (10) against ops (50)
        assert not check_roles([Role.OPS], Principal(role="viewer"))

    def test_equal_rank_allows(self):
        assert check_roles([Role.SALES], Principal(role="sales"))
        assert check_roles([Role.ADMIN], Principal(role="ORGANIZATION_ADMIN"))

    def test_higher_role_satisfies_lower_requirement(self):
        assert check_roles([Role.SALES], Principal(role="admin"))
        assert check_roles([Role.ADMIN], Principal(role="SUPER_ADMIN"))
        assert not check_roles([Role.SUPER_ADMIN], Principal(role="admin"))

    def test_unknown_principal_role_ranks_zero(self):
        assert not check_roles([Role.VIEWER], Principal(role="intern"))

    def test_unknown_required_role_ranks_zero(self):
        assert check_roles(["intern"], Principal(role="viewer"))
        assert check_roles(["intern"], Principal(role="also-unknown"))

    def test_single_role_string(self):
        assert check_roles("sales", Principal(role="ops"))
        assert not check_roles("ops", Principal(role="sales"))

    @pytest.mark.parametrize("metadata", [
        {"all": ["SUPER_ADMIN"]},
        {"any": ["viewer"]},
        {"viewer"},
        42,
        object(),
        ["viewer", 3],
        [None],
        [["viewer"]],
    ])
    @pytest.mark.parametrize("role", ["SUPER_ADMIN", "viewer"])
    def test_malformed_role_metadata_denies(self, metadata, role):
        assert not check_roles(metadata, Principal(role=role))

    def test_accepts_user_like_objects(self):
        class User:
            role = Role.OPS
            permissions = None

        assert check_roles([Role.SALES], User())


class TestPermissionGate:
    """Test check_permissions."""

    def test_no_metadata_allows(self):
        assert check_permissions(None, None)
        assert check_permissions([], None)

    def test_missing_principal_denies(self):
        assert not check_permissions([Permission.EVENTS_READ], None)

    def test_missing_role_denies_regardless_of_metadata(self):
        principal = Principal(permissions=["events:read"])
        assert not check_permissions([Permission.EVENTS_READ], principal)
        assert not check_permissions({"any": ["events:read"]}, principal)
        assert not check_permissions({"all": ["events:read"]}, principal)

    def test_plain_list_is_any(self):
        # viewer has events:read but not events:create
        principal = Principal(role="viewer")
        assert check_permissions(["events:create", "events:read"], principal)
        assert not check_permissions(["events:create", "events:delete"], principal)

    def test_any_dict(self):
        principal = Principal(role="sales")
        assert check_permissions({"any": ["prompts:publish", "outreach:execute"]}, principal)
        assert not check_permissions({"any": ["prompts:publish", "system:config"]}, principal)

    def test_all_dict(self):
        principal = Principal(role="viewer", permissions=["events:create"])
        assert not check_permissions({"all": ["events:create", "events:delete"]}, principal)

        principal = Principal(role="viewer", permissions=["events:create", "events:delete"])
        assert check_permissions({"all": ["events:create", "events:delete"]}, principal)

    def test_custom_permissions_count(self):
        principal = Principal(role="viewer", permissions=["outreach:execute"])
        assert check_permissions([Permission.OUTREACH_EXECUTE], principal)

    def test_unknown_custom_permission_does_not_match(self):
        principal = Principal(role="viewer", permissions=["not:a:real:perm"])
        assert not check_permissions(["not:a:real:perm"], principal)

    def test_rule_objects(self):
        principal = Principal(role="ops")
        assert check_permissions(AnyOf([Permission.JOBS_CANCEL]), principal)
        assert check_permissions(all_of(Permission.JOBS_READ, Permission.JOBS_CANCEL), principal)
        assert not check_permissions(AllOf([Permission.JOBS_CANCEL, Permission.USERS_READ]), principal)

    @pytest.mark.parametrize("metadata", [
        "events:read",
        {"some": ["events:read"]},
        {"any": "events:read"},
        {"any": ["events:read"], "all": ["events:read"]},
        {"any": [1, 2]},
        42,
        object(),
    ])
    def test_malformed_metadata_denies(self, metadata):
        assert not check_permissions(metadata, Principal(role="admin"))

    def test_empty_any_denies_and_empty_all_allows(self):
        principal = Principal(role="viewer")
        assert not check_permissions({"any": []}, principal)
        assert check_permissions({"all": []}, principal)


class TestScenarios:
    """End-to-end gate decisions for the default roles."""

    def test_ops_can_publish_or_execute(self):
        principal = Principal(role="ops")
        metadata = {"any": [Permission.PROMPTS_PUBLISH, Permission.AGENTS_EXECUTE]}
        assert check_permissions(metadata, principal)

    def test_viewer_cannot_create_events(self):
        principal = Principal(role="viewer")
        assert not check_permissions({"all": [Permission.EVENTS_CREATE]}, principal)

    def test_gates_are_independent(self):
        principal = Principal(role="sales")
        assert check_roles([Role.SALES], principal)
        assert not check_permissions(any_of(Permission.PROMPTS_PUBLISH), principal)

        principal = Principal(role="viewer", permissions=["prompts:publish"])
        assert not check_roles([Role.OPS], principal)
        assert check_permissions(any_of(Permission.PROMPTS_PUBLISH), principal)
