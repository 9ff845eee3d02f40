"""Permission listing and default catalog seeding."""

import logging
from collections import OrderedDict
from typing import Dict, List

from ....config.constants import PermissionAction, ROLES_RESOURCE
from ..catalog import DEFAULT_ROLES, build_permission_catalog
from ..entities import Permission, PermissionRepository, Role, RoleRepository
from .authorization_service import ensure_permission

logger = logging.getLogger(__name__)


class PermissionService:
    """Service over the permission catalog."""

    def __init__(self, permission_repo: PermissionRepository, role_repo: RoleRepository):
        self.permission_repo = permission_repo
        self.role_repo = role_repo

    async def list_grouped(self, actor) -> Dict[str, List[Permission]]:
        """List permissions keyed by their group, in catalog order."""
        ensure_permission(actor, ROLES_RESOURCE, PermissionAction.READ)

        grouped: Dict[str, List[Permission]] = OrderedDict()
        for permission in await self.permission_repo.list_all():
            grouped.setdefault(permission.group or "Other", []).append(permission)
        return grouped

    async def seed_defaults(self) -> List[Role]:
        """Upsert the permission catalog and the default roles.

        Safe to run repeatedly; existing rows are updated in place and each
        default role's grants are replaced with the catalog's.
        """
        permissions = build_permission_catalog()
        for permission in permissions:
            await self.permission_repo.upsert(permission)
        logger.info(f"Seeded {len(permissions)} permissions")

        roles = []
        for template in DEFAULT_ROLES:
            role = Role(
                id=None,
                name=template.name,
                display_name=template.display_name,
                description=template.description,
                is_system=template.is_system,
                is_default=template.is_default,
            )
            roles.append(await self.role_repo.sync_by_name(role, template.grants))
        logger.info(f"Seeded {len(roles)} default roles")
        return roles
