# Overview: Enumerated value sets shared by models, validation and services.


class OrderStatus:
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    ALL = (PENDING, PAID, SHIPPED, DELIVERED, CANCELLED)


class PaymentMethod:
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSFER = "bank_transfer"
    PAYPAL = "paypal"
    CASH = "cash"
    OTHER = "other"

    ALL = (CREDIT_CARD, DEBIT_CARD, BANK_TRANSFER, PAYPAL, CASH, OTHER)


class ShippingStatus:
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    RETURNED = "returned"

    ALL = (PENDING, PROCESSING, SHIPPED, DELIVERED, RETURNED)
