"""Tests for the Order entity and OrderService."""

import asyncio
import uuid
from decimal import Decimal

import pytest

from ecommerce_api.core.enums import OrderStatus
from ecommerce_api.core.exceptions import OrderStateError, OrderValidationError, RepositoryError
from ecommerce_api.infrastructure.persistence import InMemoryOrderRepository
from ecommerce_api.models.domain import Order
from ecommerce_api.services.order_service import OrderService

from tests.helpers import points_with


class TestOrder:

    def test_create_pending_order(self):
        user_id = uuid.uuid4()

        order = Order.create(user_id, Decimal("150.00"))

        assert order.user_id == user_id
        assert order.status is OrderStatus.PENDING
        assert order.created_at.tzinfo is not None

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-0.01")])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(OrderValidationError) as exc_info:
            Order.create(uuid.uuid4(), amount)

        assert exc_info.value.details == {"total_amount": str(amount)}

    def test_complete_only_from_pending(self):
        order = Order.create(uuid.uuid4(), Decimal("1"))
        order.mark_as_completed()

        assert order.status is OrderStatus.COMPLETED
        with pytest.raises(OrderStateError):
            order.mark_as_completed()

    def test_mark_as_failed(self):
        order = Order.create(uuid.uuid4(), Decimal("1"))
        order.mark_as_failed()

        assert order.status is OrderStatus.FAILED


class TestInMemoryOrderRepository:

    @pytest.mark.asyncio
    async def test_save_and_fetch_copy(self):
        repository = InMemoryOrderRepository()
        order = Order.create(uuid.uuid4(), Decimal("5"))

        await repository.save(order)
        order.mark_as_completed()
        stored = await repository.get_by_id(order.id)

        assert stored == order.model_copy(update={"status": OrderStatus.PENDING})

    @pytest.mark.asyncio
    async def test_duplicate_save(self):
        repository = InMemoryOrderRepository()
        order = Order.create(uuid.uuid4(), Decimal("5"))
        await repository.save(order)

        with pytest.raises(RepositoryError):
            await repository.save(order)

    @pytest.mark.asyncio
    async def test_missing(self):
        assert await InMemoryOrderRepository().get_by_id(uuid.uuid4()) is None


class SlowRepository(InMemoryOrderRepository):

    def __init__(self):
        super().__init__()
        self.entered = asyncio.Event()

    async def save(self, order):
        self.entered.set()
        await asyncio.sleep(10)


class TestOrderService:

    @pytest.fixture
    def service(self, timer, events):
        return OrderService(InMemoryOrderRepository(), timer, events)

    @pytest.mark.asyncio
    async def test_create_order(self, service, metric_points):
        order = await service.create_order(uuid.uuid4(), Decimal("150.00"))

        assert order.status is OrderStatus.COMPLETED
        assert await service.get_order(order.id) is not None
        durations = metric_points("operation.duration")
        assert len(points_with(durations, operation_name="order.save", operation_status="succeeded")) == 1
        assert len(points_with(durations, operation_name="order.fetch", operation_status="succeeded")) == 1

    @pytest.mark.asyncio
    async def test_rejected_order_counted_as_failed(self, service, metric_points, log_output):
        with pytest.raises(OrderValidationError):
            await service.create_order(uuid.uuid4(), Decimal("0"))

        [count] = metric_points("events.created.count")
        assert dict(count.attributes) == {"status": "failed"}
        errors = [e for e in log_output.entries if e["event"] == "Failed to create order"]
        assert errors[0]["error_type"] == "OrderValidationError"

    @pytest.mark.asyncio
    async def test_cancelled_order_counted_as_failed(self, timer, events, metric_points):
        repository = SlowRepository()
        service = OrderService(repository, timer, events)

        task = asyncio.create_task(service.create_order(uuid.uuid4(), Decimal("12.00")))
        await repository.entered.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        [count] = metric_points("events.created.count")
        [value] = metric_points("events.value.total")
        [duration] = metric_points("operation.duration")
        assert dict(count.attributes) == dict(value.attributes) == {"status": "failed"}
        assert value.value == pytest.approx(12.0)
        assert dict(duration.attributes)["error.type"] == "cancelled"
