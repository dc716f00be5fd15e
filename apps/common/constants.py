from decimal import Decimal

from django.db import models


class UserRole(models.TextChoices):
    WAITER = "waiter", "Waiter"
    CHEF = "chef", "Chef"
    ADMIN = "admin", "Administrator"
    SUPERADMIN = "superadmin", "Super administrator"

    @classmethod
    def managers(cls):
        return [cls.ADMIN, cls.SUPERADMIN]


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PREPARING = "preparing", "Preparing"
    SERVED = "served", "Served"
    PAID = "paid", "Paid"
    CANCELLED = "cancelled", "Cancelled"

    @classmethod
    def active(cls):
        return [cls.PENDING, cls.PREPARING, cls.SERVED]

    @classmethod
    def terminal(cls):
        return [cls.PAID, cls.CANCELLED]

    @classmethod
    def flow(cls):
        # Forward order of the kitchen / front-of-house lifecycle
        return [cls.PENDING, cls.PREPARING, cls.SERVED, cls.PAID]


class PaymentStatus(models.TextChoices):
    UNPAID = "unpaid", "Unpaid"
    PAID = "paid", "Paid"


class TableStatus(models.TextChoices):
    AVAILABLE = "available", "Available"
    OCCUPIED = "occupied", "Occupied"
    RESERVED = "reserved", "Reserved"


class MenuCategory(models.TextChoices):
    STARTERS = "starters", "Starters"
    MAIN_COURSE = "main_course", "Main Course"
    DESSERTS = "desserts", "Desserts"
    DRINKS = "drinks", "Drinks"


class PaymentProvider(models.TextChoices):
    STRIPE = "stripe", "Stripe"
    UPI = "upi", "UPI"


class PaymentSessionStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


TAX_RATE = Decimal("0.05")
SERVICE_CHARGE_RATE = Decimal("0.10")

# Roles allowed to move an order into a given status
STATUS_CHANGE_ROLES = {
    OrderStatus.PENDING: [UserRole.ADMIN, UserRole.SUPERADMIN],
    OrderStatus.PREPARING: [UserRole.CHEF, UserRole.ADMIN, UserRole.SUPERADMIN],
    OrderStatus.SERVED: [UserRole.CHEF, UserRole.ADMIN, UserRole.SUPERADMIN],
    OrderStatus.PAID: [UserRole.ADMIN, UserRole.SUPERADMIN],
    OrderStatus.CANCELLED: [UserRole.ADMIN, UserRole.SUPERADMIN],
}

ORDER_SUBMIT_ROLES = [UserRole.WAITER, UserRole.ADMIN, UserRole.SUPERADMIN]
