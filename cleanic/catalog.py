"""
Service catalog - detailing packages, vehicle surcharges, bookable time slots
and the fixed business constants (reservation fee, payment methods, daily capacity).

Prices are whole dollars. A cart line captures its price from here at the
moment it is created; later catalog changes never reprice an existing line.
"""

from dataclasses import dataclass

CATEGORIES = ("interior", "exterior", "in-n-out")

# Flat fee collected at booking time; the rest of the service total is due after service
RESERVATION_FEE = 30

PAYMENT_CREDIT_CARD = "credit_card"
PAYMENT_E_TRANSFER = "e_transfer"
PAYMENT_METHODS = (PAYMENT_CREDIT_CARD, PAYMENT_E_TRANSFER)

# Daily capacity shown on the admin schedule
MAX_CUSTOMERS_PER_DAY = 2
MAX_PACKAGES_PER_DAY = 2


class CatalogError(ValueError):
    """Unknown package or vehicle type"""


@dataclass(frozen=True)
class CatalogPackage:
    id: str
    name: str
    base_price: int
    category: str


@dataclass(frozen=True)
class VehicleSurcharge:
    vehicle_type_id: str
    name: str
    surcharge: int


PACKAGES: tuple[CatalogPackage, ...] = (
    CatalogPackage("1", "Interior Basic", 99, "interior"),
    CatalogPackage("2", "Interior Premium", 189, "interior"),
    CatalogPackage("3", "Seat Shampooing", 99, "interior"),
    CatalogPackage("4", "Stage 1 Paint Correction", 250, "exterior"),
    CatalogPackage("5", "Stage 2 Paint Correction", 450, "exterior"),
    CatalogPackage("6", "Stage 3 Paint Correction", 800, "exterior"),
    CatalogPackage("7", "Full Detail", 299, "in-n-out"),
)

VEHICLE_TYPES: tuple[VehicleSurcharge, ...] = (
    VehicleSurcharge("sedan", "Sedan", 0),
    VehicleSurcharge("suv", "SUV", 25),
    VehicleSurcharge("van", "Van", 50),
)

TIME_SLOTS: tuple[str, ...] = (
    "7:00 AM",
    "7:30 AM",
    "8:00 AM",
    "9:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "1:00 PM",
    "2:00 PM",
    "3:00 PM",
    "4:00 PM",
)

_PACKAGES_BY_ID = {package.id: package for package in PACKAGES}
_VEHICLES_BY_ID = {vehicle.vehicle_type_id: vehicle for vehicle in VEHICLE_TYPES}


def get_package(package_id: str) -> CatalogPackage:
    try:
        return _PACKAGES_BY_ID[str(package_id)]
    except KeyError:
        raise CatalogError(f"Unknown package: {package_id}") from None


def get_vehicle(vehicle_type: str) -> VehicleSurcharge:
    try:
        return _VEHICLES_BY_ID[vehicle_type]
    except KeyError:
        raise CatalogError(f"Unknown vehicle type: {vehicle_type}") from None


def packages_by_category(category: str) -> list[CatalogPackage]:
    """Packages in one category, in catalog order"""
    if category not in CATEGORIES:
        raise CatalogError(f"Unknown category: {category}")
    return [package for package in PACKAGES if package.category == category]


def final_price(package_id: str, vehicle_type: str) -> int:
    """Base price plus the vehicle surcharge"""
    return get_package(package_id).base_price + get_vehicle(vehicle_type).surcharge


def build_cart_line(package_id: str, vehicle_type: str, quantity: int = 1) -> dict:
    """
    Build a cart line (without id) for CartStore.add_item.

    The final price is computed now and carried on the line from then on.
    """
    if quantity < 1:
        raise CatalogError("Quantity must be at least 1")

    package = get_package(package_id)
    return {
        "packageId": package.id,
        "packageName": package.name,
        "basePrice": package.base_price,
        "vehicleType": get_vehicle(vehicle_type).vehicle_type_id,
        "finalPrice": final_price(package_id, vehicle_type),
        "quantity": quantity,
    }
