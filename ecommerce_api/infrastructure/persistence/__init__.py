from ecommerce_api.infrastructure.persistence.base_repository import OrderRepository
from ecommerce_api.infrastructure.persistence.memory_repository import InMemoryOrderRepository

__all__ = ["OrderRepository", "InMemoryOrderRepository"]
