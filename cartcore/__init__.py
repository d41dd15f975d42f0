"""
cartcore

Shopping cart aggregation and validation:
- cart: item manager, priced views, stock checks, CartService facade
- services: collaborator models, money helpers, Supabase catalogs
- db: Supabase + Redis client factories
- errors: exception hierarchy

Note: CartService and build_cart_service resolve on first access, so a
bare ``import cartcore`` loads nothing else. Importing any submodule that
reaches cartcore.db (cartcore.cart, the repositories) imports the supabase
and upstash_redis clients with it.
"""

__all__ = [
    "CartService",
    "build_cart_service",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartService":
        from cartcore.cart import CartService
        return CartService
    elif name == "build_cart_service":
        from cartcore.cart import build_cart_service
        return build_cart_service
    raise AttributeError(f"module 'cartcore' has no attribute '{name}'")
