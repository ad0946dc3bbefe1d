"""
Garage service catalog with owner-set prices.

Owners pick from a shared list of predefined services and set their own
price. In production both lists live in the hosted backend
(``predefined_services`` and ``services`` tables).
"""

import uuid
from typing import Iterable, Optional

from garagedesk.errors import NotFoundError, ValidationError
from garagedesk.logging_context import get_garage_logger, set_garage_id
from garagedesk.schemas.booking_schema import GarageService

logger = get_garage_logger(__name__)

PREDEFINED_SERVICES: dict[str, str] = {
    "General Service": "Maintenance",
    "Oil Change": "Maintenance",
    "Wheel Alignment": "Tyres",
    "Wheel Balancing": "Tyres",
    "Puncture Repair": "Tyres",
    "Brake Pad Replacement": "Brakes",
    "Battery Replacement": "Electrical",
    "AC Service": "Air Conditioning",
    "Denting & Painting": "Body Work",
    "Car Wash": "Cleaning",
}


class ServiceCatalog:
    """Services each garage offers, keyed by service ID."""

    def __init__(self) -> None:
        self._services: dict[str, GarageService] = {}

    def add_service(
        self, garage_id: str, name: str, price: float, category: Optional[str] = None
    ) -> GarageService:
        """Add a priced service. Category defaults to the predefined one."""
        set_garage_id(garage_id)
        if not name or not name.strip():
            raise ValidationError("Service name is required.")
        if price < 0:
            raise ValidationError(f"Service price must be >= 0, got {price}")
        service = GarageService(
            id=f"SV-{uuid.uuid4().hex[:6].upper()}",
            garage_id=garage_id,
            name=name.strip(),
            category=category or PREDEFINED_SERVICES.get(name.strip(), "General"),
            price=price,
        )
        self._services[service.id] = service
        logger.info("Service added: %s '%s' at %.2f for %s",
                    service.id, service.name, price, garage_id)
        return service.model_copy()

    def get_service(self, service_id: str) -> GarageService:
        service = self._services.get(service_id)
        if service is None:
            raise NotFoundError(f"Service {service_id} not found.")
        return service.model_copy()

    def list_services(self, garage_id: str) -> list[GarageService]:
        services = [s for s in self._services.values() if s.garage_id == garage_id]
        return [s.model_copy() for s in sorted(services, key=lambda s: (s.category, s.name))]

    def total_for(self, garage_id: str, service_ids: Iterable[str]) -> float:
        """Sum the prices of the selected services.

        Raises:
            NotFoundError: If a service is unknown or belongs to another garage.
        """
        total = 0.0
        for service_id in service_ids:
            service = self.get_service(service_id)
            if service.garage_id != garage_id:
                raise NotFoundError(
                    f"Service {service_id} is not offered by garage {garage_id}."
                )
            total += service.price
        return total

    def reset(self) -> None:
        self._services.clear()
