from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class AdvertisingSettlement(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    order_id = fields.CharField(max_length=100, null=True)
    settlement_type = fields.CharField(max_length=50, null=True, source_field="type")
    account_name = fields.CharField(max_length=255, null=True)
    marketplace = fields.CharField(max_length=50, null=True)
    currency = fields.CharField(max_length=10, default="IDR")
    settlement_amount = fields.FloatField(default=0.0, description="Advertising spend settled")
    order_created_time = fields.DatetimeField(null=True)
    order_settled_time = fields.DatetimeField(db_index=True)

    def __str__(self):
        return f"Ad settlement {self.order_id or self.public_id}: {self.settlement_amount:.2f}"

    class Meta:
        table = "advertising_settlement"


class AffiliateEndorsement(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    campaign_name = fields.CharField(max_length=255)
    affiliate_name = fields.CharField(max_length=255)
    affiliate_type = fields.CharField(max_length=50)
    start_date = fields.DatetimeField()
    end_date = fields.DatetimeField()
    endorse_fee = fields.FloatField(default=0.0)
    target_sales = fields.FloatField(default=0.0)
    actual_sales = fields.FloatField(default=0.0)
    total_commission = fields.FloatField(default=0.0)
    status = fields.CharField(max_length=20, default="active")

    def __str__(self):
        return f"{self.campaign_name} ({self.affiliate_name})"

    class Meta:
        table = "affiliate_endorsements"


class CashFlowEntry(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    entry_type = fields.CharField(max_length=20, description="income or expense")
    category = fields.CharField(max_length=100)
    amount = fields.FloatField(default=0.0)
    date = fields.DateField(db_index=True)
    description = fields.TextField(null=True)

    def __str__(self):
        return f"{self.entry_type} {self.category} {self.amount:.2f} on {self.date}"

    class Meta:
        table = "cash_flow_entries"
