from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.common.constants import MenuCategory
from apps.common.models import BaseModel


class MenuItem(BaseModel):
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    category = models.CharField(max_length=20, choices=MenuCategory.choices)
    image = models.URLField(max_length=500, blank=True)
    available = models.BooleanField(default=True)

    class Meta:
        db_table = "menu_item"
        ordering = ("category", "name")
        indexes = [
            models.Index(fields=["available", "category"], name="menu_item_avail_cat_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["category", "name"], name="unique_menu_item_per_category"),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_category_display()})"
