from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class SalesRecord(TimestampMixin):
    """One imported marketplace line item. An order can span several rows."""

    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    order_id = fields.CharField(max_length=100, db_index=True)
    seller_sku = fields.CharField(max_length=100, null=True)
    product_name = fields.CharField(max_length=255)
    color = fields.CharField(max_length=50, null=True)
    size = fields.CharField(max_length=20, null=True)
    marketplace = fields.CharField(max_length=50, null=True)

    quantity = fields.IntField(default=0)
    order_amount = fields.FloatField(default=0.0, description="Gross merchandise value")
    total_revenue = fields.FloatField(default=0.0)
    settlement_amount = fields.FloatField(default=0.0, description="Amount remitted after platform fees")
    hpp = fields.FloatField(default=0.0, description="Cost of goods sold for the line")

    created_time = fields.DatetimeField(db_index=True)
    delivered_time = fields.DatetimeField(null=True)

    def __str__(self):
        return f"{self.order_id} - {self.product_name} x{self.quantity}"

    class Meta:
        table = "sales_data"
