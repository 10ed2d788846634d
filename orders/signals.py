"""
Lifecycle signals sent after a staff write commits its transaction.

``order_status_changed``: sender=Order, order, previous_status, new_status
``order_paid``: sender=Order, order, payment_method
"""
from django.dispatch import Signal

order_status_changed = Signal()
order_paid = Signal()
