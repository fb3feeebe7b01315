from .appointments import AppointmentsClient
from .auth import AuthClient
from .base import BaseClient, TableClient
from .blocks import BlocksClient
from .product_sales import ProductSalesClient
from .products import ProductsClient
from .profiles import ProfilesClient
from .roles import RolesClient
from .settings import SettingsClient

__all__ = [
    "AppointmentsClient",
    "AuthClient",
    "BaseClient",
    "BlocksClient",
    "ProductSalesClient",
    "ProductsClient",
    "ProfilesClient",
    "RolesClient",
    "SettingsClient",
    "TableClient",
]
