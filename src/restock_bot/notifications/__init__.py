from .sms_notifier import SmsNotifier, build_cart_message

__all__ = ['SmsNotifier', 'build_cart_message']
