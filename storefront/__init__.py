"""
Storefront - product catalog, client-owned cart and checkout integration.

    from storefront.cart import CartStore, MemoryStorage
    from storefront.catalog import Catalog
"""

__version__ = "0.1.0"
