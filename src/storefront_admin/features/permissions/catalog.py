"""Default permission catalog and roles.

Resources are namespaces; each lists the actions it supports and, for
actions that can be granted narrowly, the scopes it is offered in.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ...config.constants import PermissionAction, PermissionScope, SUPER_ADMIN_ROLE
from .entities import Permission, PermissionKey

A = PermissionAction
S = PermissionScope

# resource -> (group, [(action, label, scopes)])
RESOURCES: Dict[str, Tuple[str, List[Tuple[PermissionAction, str, Tuple[PermissionScope, ...]]]]] = {
    # Catalog
    "products": ("Catalog", [
        (A.CREATE, "Create products", (S.ALL,)),
        (A.READ, "View products", (S.ALL,)),
        (A.UPDATE, "Update products", (S.ALL,)),
        (A.DELETE, "Delete products", (S.ALL,)),
        (A.MANAGE, "Manage all products", (S.ALL,)),
    ]),
    "categories": ("Catalog", [
        (A.CREATE, "Create categories", (S.ALL,)),
        (A.READ, "View categories", (S.ALL,)),
        (A.UPDATE, "Update categories", (S.ALL,)),
        (A.DELETE, "Delete categories", (S.ALL,)),
        (A.MANAGE, "Manage categories", (S.ALL,)),
    ]),
    "inventory": ("Catalog", [
        (A.READ, "View stock levels", (S.ALL,)),
        (A.UPDATE, "Adjust stock levels", (S.ALL,)),
        (A.MANAGE, "Manage inventory", (S.ALL,)),
    ]),

    # Orders
    "orders": ("Orders", [
        (A.CREATE, "Create manual orders", (S.ALL,)),
        (A.READ, "View orders", (S.OWN, S.ALL)),
        (A.UPDATE, "Update orders", (S.ALL,)),
        (A.DELETE, "Cancel or delete orders", (S.ALL,)),
        (A.MANAGE, "Manage all orders", (S.ALL,)),
    ]),
    "fulfillments": ("Orders", [
        (A.CREATE, "Create shipments", (S.ALL,)),
        (A.READ, "View shipping details", (S.ALL,)),
        (A.UPDATE, "Update shipping status", (S.ALL,)),
        (A.MANAGE, "Manage fulfillment", (S.ALL,)),
    ]),
    "payments": ("Orders", [
        (A.READ, "View payments", (S.ALL,)),
        (A.UPDATE, "Confirm payments", (S.ALL,)),
        (A.MANAGE, "Manage payments", (S.ALL,)),
    ]),

    # Users
    "users": ("Users", [
        (A.CREATE, "Create users", (S.ALL,)),
        (A.READ, "View users", (S.ALL,)),
        (A.UPDATE, "Update user details", (S.ALL,)),
        (A.DELETE, "Delete or deactivate users", (S.ALL,)),
        (A.MANAGE, "Manage all users", (S.ALL,)),
    ]),
    "roles": ("Users", [
        (A.CREATE, "Create roles", (S.ALL,)),
        (A.READ, "View roles", (S.ALL,)),
        (A.UPDATE, "Update role permissions", (S.ALL,)),
        (A.DELETE, "Delete roles", (S.ALL,)),
        (A.MANAGE, "Manage roles and permissions", (S.ALL,)),
    ]),
    "customer_groups": ("Users", [
        (A.CREATE, "Create customer groups", (S.ALL,)),
        (A.READ, "View customer groups", (S.ALL,)),
        (A.UPDATE, "Update customer groups", (S.ALL,)),
        (A.DELETE, "Delete customer groups", (S.ALL,)),
        (A.MANAGE, "Manage customer groups", (S.ALL,)),
    ]),

    # Pricing & Promotions
    "price_lists": ("Pricing", [
        (A.CREATE, "Create price lists", (S.ALL,)),
        (A.READ, "View price lists", (S.ALL,)),
        (A.UPDATE, "Update price lists", (S.ALL,)),
        (A.DELETE, "Delete price lists", (S.ALL,)),
        (A.MANAGE, "Manage price lists", (S.ALL,)),
    ]),
    "promotions": ("Pricing", [
        (A.CREATE, "Create promotions", (S.ALL,)),
        (A.READ, "View promotions", (S.ALL,)),
        (A.UPDATE, "Update promotions", (S.ALL,)),
        (A.DELETE, "Delete promotions", (S.ALL,)),
        (A.MANAGE, "Manage promotions", (S.ALL,)),
    ]),

    # Blog
    "blog_posts": ("Blog", [
        (A.CREATE, "Write posts", (S.ALL,)),
        (A.READ, "View posts", (S.OWN, S.ALL)),
        (A.UPDATE, "Edit posts", (S.OWN, S.ALL)),
        (A.DELETE, "Delete posts", (S.OWN, S.ALL)),
        (A.MANAGE, "Manage the blog", (S.ALL,)),
    ]),
    "blog_categories": ("Blog", [
        (A.CREATE, "Create blog categories", (S.ALL,)),
        (A.READ, "View blog categories", (S.ALL,)),
        (A.UPDATE, "Update blog categories", (S.ALL,)),
        (A.DELETE, "Delete blog categories", (S.ALL,)),
        (A.MANAGE, "Manage blog categories", (S.ALL,)),
    ]),

    # Reviews & Q&A
    "reviews": ("Reviews", [
        (A.READ, "View reviews", (S.ALL,)),
        (A.UPDATE, "Approve or hide reviews", (S.ALL,)),
        (A.DELETE, "Delete reviews", (S.ALL,)),
        (A.MANAGE, "Manage reviews", (S.ALL,)),
    ]),
    "product_qa": ("Reviews", [
        (A.READ, "View questions", (S.ALL,)),
        (A.CREATE, "Answer questions", (S.ALL,)),
        (A.UPDATE, "Moderate questions", (S.ALL,)),
        (A.DELETE, "Delete questions", (S.ALL,)),
        (A.MANAGE, "Manage questions", (S.ALL,)),
    ]),

    # Settings
    "settings": ("Settings", [
        (A.READ, "View settings", (S.ALL,)),
        (A.UPDATE, "Update settings", (S.ALL,)),
        (A.MANAGE, "Manage system settings", (S.ALL,)),
    ]),
    "media": ("Settings", [
        (A.CREATE, "Upload files", (S.ALL,)),
        (A.READ, "View media", (S.ALL,)),
        (A.DELETE, "Delete files", (S.ALL,)),
        (A.MANAGE, "Manage media", (S.ALL,)),
    ]),

    # Reports
    "analytics": ("Reports", [
        (A.READ, "View overview statistics", (S.ALL,)),
        (A.MANAGE, "View detailed reports", (S.ALL,)),
    ]),

    # Support
    "chat": ("Support", [
        (A.READ, "View chat history", (S.ALL,)),
        (A.MANAGE, "Manage the chatbot", (S.ALL,)),
    ]),
}


@dataclass(frozen=True)
class RoleTemplate:
    """A default role and the grants it is seeded with."""

    name: str
    display_name: str
    description: str
    grants: Tuple[PermissionKey, ...] = field(default_factory=tuple)
    is_system: bool = True
    is_default: bool = False


def _keys(*entries: Tuple[str, PermissionAction], scope: Optional[PermissionScope] = None) -> Tuple[PermissionKey, ...]:
    return tuple((resource, action, scope or S.ALL) for resource, action in entries)


DEFAULT_ROLES: Tuple[RoleTemplate, ...] = (
    RoleTemplate(
        name=SUPER_ADMIN_ROLE,
        display_name="Super Admin",
        description="Full control of the system",
        grants=tuple((resource, A.MANAGE, S.ALL) for resource in RESOURCES),
    ),
    RoleTemplate(
        name="admin",
        display_name="Administrator",
        description="Manages most features except role assignment",
        grants=_keys(
            ("products", A.MANAGE), ("categories", A.MANAGE), ("inventory", A.MANAGE),
            ("orders", A.MANAGE), ("fulfillments", A.MANAGE), ("payments", A.MANAGE),
            ("users", A.READ), ("customer_groups", A.MANAGE),
            ("price_lists", A.MANAGE), ("promotions", A.MANAGE),
            ("blog_posts", A.MANAGE), ("blog_categories", A.MANAGE),
            ("reviews", A.MANAGE), ("product_qa", A.MANAGE),
            ("settings", A.READ), ("media", A.MANAGE),
            ("analytics", A.MANAGE), ("chat", A.READ),
        ),
    ),
    RoleTemplate(
        name="product_manager",
        display_name="Product Manager",
        description="Manages products, categories and stock",
        grants=_keys(
            ("products", A.MANAGE), ("categories", A.MANAGE), ("inventory", A.MANAGE),
            ("media", A.MANAGE), ("reviews", A.READ), ("product_qa", A.MANAGE),
        ),
    ),
    RoleTemplate(
        name="order_manager",
        display_name="Order Manager",
        description="Processes orders, shipping and payments",
        grants=_keys(
            ("orders", A.MANAGE), ("fulfillments", A.MANAGE), ("payments", A.MANAGE),
            ("products", A.READ), ("users", A.READ),
        ),
    ),
    RoleTemplate(
        name="content_writer",
        display_name="Content Writer",
        description="Writes and maintains blog posts",
        grants=(
            ("blog_posts", A.CREATE, S.ALL),
            ("blog_posts", A.READ, S.OWN),
            ("blog_posts", A.UPDATE, S.OWN),
            ("blog_posts", A.DELETE, S.OWN),
            ("blog_categories", A.READ, S.ALL),
            ("media", A.CREATE, S.ALL),
            ("media", A.READ, S.ALL),
        ),
    ),
    RoleTemplate(
        name="support",
        display_name="Customer Support",
        description="Reads orders, answers product questions, reviews chats",
        grants=_keys(
            ("orders", A.READ), ("users", A.READ), ("products", A.READ),
            ("reviews", A.READ), ("product_qa", A.CREATE), ("product_qa", A.READ),
            ("chat", A.READ),
        ),
    ),
    RoleTemplate(
        name="customer",
        display_name="Customer",
        description="Default role for self-registered customers",
        is_default=True,
    ),
)


def build_permission_catalog() -> List[Permission]:
    """Expand the resource table into unique permissions."""
    permissions: Dict[PermissionKey, Permission] = {}
    for resource, (group, actions) in RESOURCES.items():
        for action, label, scopes in actions:
            for scope in scopes:
                permission = Permission(
                    id=None,
                    resource=resource,
                    action=action,
                    scope=scope,
                    name=f"{label} (own)" if scope == S.OWN else label,
                    group=group,
                    is_system=True,
                )
                permissions[permission.key] = permission
    return list(permissions.values())
