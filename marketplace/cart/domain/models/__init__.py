from .cart import CartEntry


__all__ = [
    "CartEntry",
]
