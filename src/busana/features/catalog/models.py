"""Product catalog model used for the stock snapshot."""

from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class Product(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    product_name = fields.CharField(max_length=255)
    category = fields.CharField(max_length=100, null=True)
    brand = fields.CharField(max_length=100, null=True)
    size = fields.CharField(max_length=20, null=True)
    color = fields.CharField(max_length=50, null=True)

    price = fields.FloatField(default=0.0)
    cost = fields.FloatField(default=0.0)
    stock_quantity = fields.IntField(default=0)
    min_stock = fields.IntField(default=0)

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock_quantity == 0

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.stock_quantity <= self.min_stock

    def __str__(self):
        return f"{self.product_name} (Stock: {self.stock_quantity}, Price: {self.price:.2f})"

    class Meta:
        table = "product_data"
