from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models, transaction
import uuid


class RevenueCenterManager(models.Manager):
    def ensure_defaults(self):
        """Seed the configured centers the first time the table is read."""
        if self.exists():
            return
        with transaction.atomic():
            for center in getattr(settings, 'DEFAULT_REVENUE_CENTERS', []):
                self.get_or_create(
                    name=center['name'],
                    defaults={
                        'sales': center.get('sales', 0),
                        'divisor': center.get('divisor', settings.LABOR_DEFAULT_DIVISOR),
                    },
                )


class RevenueCenter(models.Model):
    """
    A named operational area with its own sales figure.
    ``sales / divisor`` is the ideal ("perfect") labor hours for that sales level.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    sales = models.DecimalField(max_digits=12, decimal_places=2, default=0.00, validators=[MinValueValidator(0)])
    divisor = models.DecimalField(max_digits=8, decimal_places=2, default=35.00, validators=[MinValueValidator(0.1)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RevenueCenterManager()

    class Meta:
        db_table = 'revenue_centers'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} (sales {self.sales}, divisor {self.divisor})"
