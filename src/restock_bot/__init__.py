"""Best Buy restock bot: sign in, watch one product, add it to the cart, text the operator."""

__version__ = "0.1.0"
