"""Add-to-cart action"""

from .cart_manager import CartManager, AcquisitionResult

__all__ = ['CartManager', 'AcquisitionResult']
