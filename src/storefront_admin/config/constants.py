"""Constants and enums for storefront-admin.

The permission enums mirror the ``permission_action`` and
``permission_scope`` database types.
"""

from enum import Enum


class PermissionAction(str, Enum):
    """Permission action - corresponds to the permission_action type."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    MANAGE = "MANAGE"


class PermissionScope(str, Enum):
    """Permission scope - corresponds to the permission_scope type."""

    OWN = "OWN"
    ALL = "ALL"


# Role name that bypasses grant lookup entirely
SUPER_ADMIN_ROLE = "super_admin"

# Resource guarding role (re)assignment
ROLES_RESOURCE = "roles"


class CacheKeys:
    """Builders for the ``entity:id`` and ``entity:*`` cache key families."""

    CATEGORIES_PATTERN = "categories:*"
    PRODUCTS_PATTERN = "products:*"
    PRODUCT_LISTS_PATTERN = "products:list:*"
    USER_PERMISSIONS_PATTERN = "user:*:permissions"
    SETTINGS_PATTERN = "settings:*"
    PUBLIC_SETTINGS = "settings:public"

    @staticmethod
    def category(category_id: str) -> str:
        return f"category:{category_id}"

    @staticmethod
    def category_products(category_id: str) -> str:
        return f"category:{category_id}:products"

    @staticmethod
    def product(product_id: str) -> str:
        return f"product:{product_id}"

    @staticmethod
    def user(user_id: str) -> str:
        return f"user:{user_id}"

    @staticmethod
    def user_permissions(user_id: str) -> str:
        return f"user:{user_id}:permissions"

    @staticmethod
    def setting(key: str) -> str:
        return f"settings:{key}"
