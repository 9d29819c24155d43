import datetime

import pytest_asyncio

from busana.features.catalog.models import Product
from busana.features.ledgers.models import AdvertisingSettlement, AffiliateEndorsement, CashFlowEntry
from busana.features.sales.models import SalesRecord


@pytest_asyncio.fixture
async def sale_factory(store):
    """Creates sales line items. GMV and settlement default to the revenue."""

    async def _factory(
        order_id: str,
        created_time: datetime.datetime,
        quantity: int = 1,
        total_revenue: float = 100_000.0,
        order_amount: float = None,
        settlement_amount: float = None,
        hpp: float = 0.0,
        product_name: str = "Kebaya Modern",
    ):
        return await SalesRecord.create(
            order_id=order_id,
            product_name=product_name,
            quantity=quantity,
            order_amount=order_amount if order_amount is not None else total_revenue,
            total_revenue=total_revenue,
            settlement_amount=settlement_amount if settlement_amount is not None else total_revenue,
            hpp=hpp,
            created_time=created_time,
            using_db=store.connection,
        )

    return _factory


@pytest_asyncio.fixture
async def product_factory(store):
    async def _factory(name: str, stock_quantity: int = 10, min_stock: int = 5, price: float = 100.0):
        return await Product.create(
            product_name=name,
            stock_quantity=stock_quantity,
            min_stock=min_stock,
            price=price,
            using_db=store.connection,
        )

    return _factory


@pytest_asyncio.fixture
async def advertising_factory(store):
    async def _factory(settled: datetime.datetime, amount: float):
        return await AdvertisingSettlement.create(
            order_settled_time=settled, settlement_amount=amount, using_db=store.connection
        )

    return _factory


@pytest_asyncio.fixture
async def affiliate_factory(store):
    async def _factory(
        created: datetime.datetime,
        endorse_fee: float = 0.0,
        actual_sales: float = 0.0,
        total_commission: float = 0.0,
    ):
        return await AffiliateEndorsement.create(
            campaign_name="Ramadan Collection",
            affiliate_name="Style Creator",
            affiliate_type="influencer",
            start_date=created,
            end_date=created + datetime.timedelta(days=14),
            endorse_fee=endorse_fee,
            actual_sales=actual_sales,
            total_commission=total_commission,
            created_at=created,
            using_db=store.connection,
        )

    return _factory


@pytest_asyncio.fixture
async def cash_flow_factory(store):
    async def _factory(
        day: datetime.date,
        amount: float,
        category: str = "Salaries & Benefits",
        entry_type: str = "expense",
    ):
        return await CashFlowEntry.create(
            entry_type=entry_type, category=category, amount=amount, date=day,
            using_db=store.connection,
        )

    return _factory
