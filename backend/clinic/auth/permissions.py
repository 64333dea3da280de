"""
Permission-based access control for the clinic API.

This module provides:
- Permission definitions, one per action on a resource kind
- The role -> permission table
- The operation -> required permission table consulted before dispatch
- PermissionRegistry, the read-only object the authorization guard queries
"""

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from ..models.Role import Role


class Permission(str, Enum):
    """
    Enum of all permissions, named "<action>:<resource>".
    """
    # Treatments
    CREATE_TREATMENT = "create:treatment"
    READ_TREATMENT = "read:treatment"
    UPDATE_TREATMENT = "update:treatment"
    DELETE_TREATMENT = "delete:treatment"

    # Treatment options
    CREATE_TREATMENT_OPTION = "create:treatment_option"
    READ_TREATMENT_OPTION = "read:treatment_option"
    UPDATE_TREATMENT_OPTION = "update:treatment_option"
    DELETE_TREATMENT_OPTION = "delete:treatment_option"

    # Medications
    CREATE_MEDICATION = "create:medication"
    READ_MEDICATION = "read:medication"
    UPDATE_MEDICATION = "update:medication"
    DELETE_MEDICATION = "delete:medication"

    # Patients
    CREATE_PATIENT = "create:patient"
    READ_PATIENT = "read:patient"
    UPDATE_PATIENT = "update:patient"
    DELETE_PATIENT = "delete:patient"

    # User management
    CREATE_USER = "create:user"
    READ_USER = "read:user"
    UPDATE_USER = "update:user"
    DELETE_USER = "delete:user"

    # Admin only: listing including soft-deleted medications
    READ_ALL_MEDICATIONS = "read:all_medications"


READ_ONLY_PERMISSIONS = (
    Permission.READ_TREATMENT,
    Permission.READ_TREATMENT_OPTION,
    Permission.READ_MEDICATION,
    Permission.READ_PATIENT,
)

# ADMIN is every permission, so new ones reach it without listing them here.
ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = MappingProxyType({
    Role.ADMIN: frozenset(Permission),
    Role.DOCTOR: frozenset({
        Permission.CREATE_TREATMENT,
        Permission.READ_TREATMENT,
        Permission.UPDATE_TREATMENT,
        Permission.READ_TREATMENT_OPTION,
        Permission.READ_MEDICATION,
        Permission.CREATE_PATIENT,
        Permission.READ_PATIENT,
        Permission.UPDATE_PATIENT,
    }),
    Role.NURSE: frozenset(READ_ONLY_PERMISSIONS),
    Role.STAFF: frozenset(READ_ONLY_PERMISSIONS),
})


def _requires(*permissions: Permission) -> frozenset[Permission]:
    return frozenset(permissions)


# Map operation names to the permissions they require (all of them).
# Operations missing from this table are open to any authenticated caller.
OPERATION_PERMISSIONS: Mapping[str, frozenset[Permission]] = MappingProxyType({
    # Users
    "users.create": _requires(Permission.CREATE_USER),
    "users.list": _requires(Permission.READ_USER),
    "users.get": _requires(Permission.READ_USER),
    "users.update": _requires(Permission.UPDATE_USER),
    "users.delete": _requires(Permission.DELETE_USER),

    # Patients
    "patients.create": _requires(Permission.CREATE_PATIENT),
    "patients.list": _requires(Permission.READ_PATIENT),
    "patients.get": _requires(Permission.READ_PATIENT),
    "patients.get_by_code": _requires(Permission.READ_PATIENT),
    "patients.update": _requires(Permission.UPDATE_PATIENT),
    "patients.delete": _requires(Permission.DELETE_PATIENT),

    # Medications
    "medications.create": _requires(Permission.CREATE_MEDICATION),
    "medications.list": _requires(Permission.READ_MEDICATION),
    "medications.search": _requires(Permission.READ_MEDICATION),
    "medications.active": _requires(Permission.READ_MEDICATION),
    "medications.all": _requires(Permission.READ_ALL_MEDICATIONS),
    "medications.get": _requires(Permission.READ_MEDICATION),
    "medications.update": _requires(Permission.UPDATE_MEDICATION),
    "medications.delete": _requires(Permission.DELETE_MEDICATION),

    # Treatment options
    "treatment_options.create": _requires(Permission.CREATE_TREATMENT_OPTION),
    "treatment_options.list": _requires(Permission.READ_TREATMENT_OPTION),
    "treatment_options.update": _requires(Permission.UPDATE_TREATMENT_OPTION),
    "treatment_options.delete": _requires(Permission.DELETE_TREATMENT_OPTION),

    # Treatments
    "treatments.create": _requires(Permission.CREATE_TREATMENT),
    "treatments.list": _requires(Permission.READ_TREATMENT),
    "treatments.get": _requires(Permission.READ_TREATMENT),
    "treatments.list_by_patient": _requires(Permission.READ_TREATMENT),
    "treatments.update": _requires(Permission.UPDATE_TREATMENT),
    "treatments.delete": _requires(Permission.DELETE_TREATMENT),
})


def authorize(granted: Iterable[Permission], required: Iterable[Permission]) -> bool:
    """
    All-or-nothing check: True only if every required permission is granted.

    An empty requirement is always satisfied.
    """
    return frozenset(required) <= frozenset(granted)


class PermissionRegistry:
    """
    Read-only view over the role and operation tables.

    Built once when the application is created and handed to the
    authorization guard through the app state.
    """

    def __init__(
        self,
        role_permissions: Mapping[Role, frozenset[Permission]] = ROLE_PERMISSIONS,
        operation_permissions: Mapping[str, frozenset[Permission]] = OPERATION_PERMISSIONS,
    ):
        missing = [role for role in Role if role not in role_permissions]
        if missing:
            raise ValueError(f"No permission entry for roles: {missing}")

        self._role_permissions = MappingProxyType(
            {role: frozenset(perms) for role, perms in role_permissions.items()}
        )
        self._operation_permissions = MappingProxyType(
            {name: frozenset(perms) for name, perms in operation_permissions.items()}
        )

    def permissions_for(self, role: Role | str) -> frozenset[Permission]:
        """
        Permissions held by a role.

        Args:
            role: A Role, or its string value

        Returns:
            frozenset[Permission]: empty for an unknown role
        """
        try:
            return self._role_permissions[Role(role)]
        except ValueError:
            return frozenset()

    def required_for(self, operation: str) -> frozenset[Permission]:
        return self._operation_permissions.get(operation, frozenset())

    def authorize(self, role: Role | str, required: Iterable[Permission]) -> bool:
        return authorize(self.permissions_for(role), required)

    def can_perform(self, role: Role | str, operation: str) -> bool:
        return self.authorize(role, self.required_for(operation))

    @property
    def operations(self) -> frozenset[str]:
        return frozenset(self._operation_permissions)
