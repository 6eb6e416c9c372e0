# fleet_console/services/field_registry.py
"""
Per-entity grid configuration: the ordered fields each page can show/export,
which of them are visible on first load, how the search box matches, and
which upstream endpoint feeds the page.

Registries are hand-declared (not derived from the API schema).
"""
from __future__ import annotations

from typing import Dict, List

from fleet_console.models.grid import EntityGrid, FieldDescriptor, FieldType

TEXT = FieldType.TEXT
NUMBER = FieldType.NUMBER
CURRENCY = FieldType.CURRENCY
DATE = FieldType.DATE
STATUS = FieldType.STATUS


class UnknownEntityError(KeyError):
    pass


def _f(key, label, type_=TEXT, accessor=None) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, type=type_, accessor=accessor)


_AUDIT_FIELDS = (
    _f("created_at", "Created At", DATE),
    _f("updated_at", "Updated At", DATE),
)


VEHICLES = EntityGrid(
    entity_type="vehicles",
    title="Vehicles",
    endpoint="vehicles",
    fields=(
        _f("reg_number", "Registration Number"),
        _f("vin_number", "VIN Number"),
        _f("trim", "Model/Trim"),
        _f("year", "Year"),  # text: years are not digit-grouped
        _f("status", "Status", STATUS),
        _f("color", "Color"),
        _f("engine_number", "Engine Number"),
        _f("chassis_number", "Chassis Number"),
        _f("current_region", "Current Region"),
        _f("current_district", "Current District"),
        _f("current_mileage", "Current Mileage (Km)", NUMBER),
        _f("last_service_date", "Last Service Date", DATE),
        _f("next_service_km", "Next Service (Km)", NUMBER),
        _f("vehicle_type_name", "Vehicle Type"),
        _f("vehicle_make_name", "Make"),
        _f("subsidiary_name", "Subsidiary"),
        _f("notes", "Notes"),
    ) + _AUDIT_FIELDS,
    default_fields=(
        "reg_number", "vin_number", "trim", "year", "status", "color",
        "vehicle_type_name", "vehicle_make_name", "subsidiary_name",
    ),
)

MAINTENANCE = EntityGrid(
    entity_type="maintenance",
    title="Maintenance Records",
    endpoint="maintenance",
    fields=(
        _f("service_date", "Service Date", DATE),
        _f("vehicle_name", "Vehicle"),
        _f("service_type", "Service Type"),
        _f("cost", "Cost (Ghc)", CURRENCY),
        _f("status", "Status", STATUS),
        _f("mileage_at_service", "Mileage (Km)", NUMBER),
        _f("service_details", "Service Details"),
        _f("parts_replaced", "Parts Replaced"),
        _f("mechanic_name", "Mechanic"),
        _f("workshop_name", "Workshop"),
    ) + _AUDIT_FIELDS,
    default_fields=(
        "service_date", "vehicle_name", "service_type", "cost", "status",
        "mileage_at_service", "mechanic_name", "workshop_name",
    ),
)

ROADWORTHY = EntityGrid(
    entity_type="roadworthy",
    title="Roadworthy Certificates",
    endpoint="roadworthy",
    fields=(
        _f("company", "Company"),
        _f("vehicle_number", "Vehicle Number"),
        _f("vehicle_type", "Vehicle Type"),
        _f("date_issued", "Date Issued", DATE),
        _f("date_expired", "Date Expired", DATE),
        _f("roadworth_status", "Status", STATUS),
        _f("updated_by", "Updated By"),
    ) + _AUDIT_FIELDS,
    default_fields=(
        "company", "vehicle_number", "vehicle_type", "roadworth_status",
        "date_issued", "date_expired",
    ),
    expiry_field="date_expired",
)

COMPANIES = EntityGrid(
    entity_type="companies",
    title="Companies",
    endpoint="companies",
    fields=(
        _f("name", "Company Name"),
        _f("location", "Location"),
        _f("loc_code", "Location Code"),
        _f("phone", "Phone"),
        _f("email", "Email"),
        _f("address", "Address"),
        _f("contact_person", "Contact Person"),
        _f("contact_phone", "Contact Phone"),
        _f("group_name", "Group", TEXT, "groups.name"),
        _f("status", "Status", STATUS),
        _f("description", "Description"),
    ) + _AUDIT_FIELDS,
    default_fields=(
        "name", "location", "loc_code", "phone", "email", "group_name",
        "contact_person", "status",
    ),
)

DRIVERS = EntityGrid(
    entity_type="drivers",
    title="Drivers",
    endpoint="drivers",
    fields=(
        _f("name", "Driver Name"),
        _f("phone", "Phone Number"),
        _f("license_number", "License Number"),
        _f("license_category", "License Category"),
        _f("license_expire", "License Expiry", DATE),
        _f("date_issued", "License Issue Date", DATE),
        _f("dob", "Date of Birth", DATE),
        _f("region", "Region"),
        _f("district", "District"),
        _f("status", "Status", STATUS),
        _f("subsidiary_name", "Subsidiary"),
        _f("vehicle_reg_number", "Vehicle Registration"),
        _f("created_by", "Created By"),
        _f("updated_by", "Updated By"),
    ) + _AUDIT_FIELDS,
    default_fields=(
        "name", "phone", "license_number", "license_category", "status",
        "region", "subsidiary_name", "vehicle_reg_number",
    ),
    expiry_field="license_expire",
)

REPAIRS = EntityGrid(
    entity_type="repairs",
    title="Repairs",
    endpoint="repairs",
    fields=(
        _f("service_date", "Service Date", DATE),
        _f("vehicles.reg_number", "Vehicle"),
        _f("cost", "Cost", CURRENCY),
        _f("status", "Status", STATUS),
        _f("created_by", "Created By"),
        _f("updated_by", "Updated By"),
    ) + _AUDIT_FIELDS,
    default_fields=("service_date", "vehicles.reg_number", "cost", "status"),
    search_fields=("vehicles.reg_number", "status", "cost"),
)

FUEL_LOGS = EntityGrid(
    entity_type="fuel-logs",
    title="Fuel Logs",
    endpoint="fuel-logs",
    fields=(
        _f("refuel_date", "Refuel Date", DATE),
        _f("vehicles.reg_number", "Vehicle"),
        _f("driver_operators.name", "Driver"),
        _f("quantity", "Quantity (L)", NUMBER),
        _f("unit_cost", "Unit Cost (Ghc)", CURRENCY),
        _f("total_cost", "Total Cost (Ghc)", CURRENCY),
        _f("mileage_before", "Mileage Before", NUMBER),
        _f("mileage_after", "Mileage After", NUMBER),
        _f("fuel_type", "Fuel Type"),
        _f("vendor", "Vendor"),
        _f("receipt_number", "Receipt Number"),
        _f("notes", "Notes"),
    ),
    default_fields=(
        "refuel_date", "vehicles.reg_number", "driver_operators.name",
        "quantity", "unit_cost", "total_cost", "fuel_type",
    ),
    search_fields=(
        "vehicles.reg_number", "driver_operators.name", "fuel_type",
        "vendor", "receipt_number", "notes",
    ),
)

INSURANCE = EntityGrid(
    entity_type="insurance",
    title="Insurance Policies",
    endpoint="insurance",
    fields=(
        _f("policy_number", "Policy Number"),
        _f("insurance_company", "Insurance Company"),
        _f("start_date", "Start Date", DATE),
        _f("end_date", "End Date", DATE),
        _f("premium_amount", "Premium Amount", CURRENCY),
        _f("coverage_type", "Coverage Type"),
        _f("notes", "Notes"),
        _f("vehicle_reg_number", "Vehicle", TEXT, "vehicles.reg_number"),
    ) + _AUDIT_FIELDS,
    default_fields=(
        "policy_number", "insurance_company", "coverage_type",
        "premium_amount", "start_date", "end_date",
    ),
    expiry_field="end_date",
)

USERS = EntityGrid(
    entity_type="users",
    title="Users",
    endpoint="users",
    fields=(
        _f("name", "Full Name"),
        _f("email", "Email Address"),
        _f("phone", "Phone Number"),
        _f("role", "Role"),
        _f("region", "Region"),
        _f("district", "District"),
        _f("license_number", "License Number"),
        _f("license_category", "License Category"),
        _f("license_expiry", "License Expiry", DATE),
        _f("specialization", "Specialization"),
        _f("is_active", "Active", STATUS),
        _f("user_code", "User Code"),
        _f("user_type", "User Type"),
        _f("created_at", "Created Date", DATE),
        _f("updated_at", "Last Updated", DATE),
    ),
    default_fields=("name", "email", "phone", "role", "is_active", "created_at"),
    # is_active arrives as a boolean
    status_colors={"true": "green", "false": "gray"},
)

SPARE_PART_INVENTORY = EntityGrid(
    entity_type="spare-part-inventory",
    title="Spare Part Inventory",
    endpoint="spare-part-inventory",
    fields=(
        _f("part_name", "Part Name"),
        _f("description", "Description"),
        _f("quantity", "Quantity", NUMBER),
        _f("reorder_threshold", "Reorder Threshold", NUMBER),
        _f("supplier_name", "Supplier Name"),
    ) + _AUDIT_FIELDS,
    default_fields=("part_name", "description", "quantity", "reorder_threshold", "supplier_name"),
)

SPARE_PART_REQUESTS = EntityGrid(
    entity_type="spare-part-requests",
    title="Spare Part Requests",
    endpoint="spare-part-request",
    fields=(
        _f("part_name", "Part Name", TEXT, "spare_part_inventory.part_name"),
        _f("part_description", "Description", TEXT, "spare_part_inventory.description"),
        _f("quantity", "Quantity", NUMBER),
        _f("justification", "Justification"),
        _f("region", "Region"),
        _f("district", "District"),
        _f("status", "Status", STATUS),
        _f("vehicle_reg_number", "Vehicle", TEXT, "vehicles.reg_number"),
    ) + _AUDIT_FIELDS,
    default_fields=("part_name", "quantity", "justification", "status", "vehicle_reg_number", "created_at"),
)

SPARE_PART_DISPATCHES = EntityGrid(
    entity_type="spare-part-dispatches",
    title="Spare Part Dispatches",
    endpoint="spare-part-dispatch",
    fields=(
        _f("part_name", "Part Name", TEXT, "spare_part_request.spare_part_inventory.part_name"),
        _f("part_description", "Description", TEXT, "spare_part_request.spare_part_inventory.description"),
        _f("supplier_name", "Supplier", TEXT, "spare_part_request.spare_part_inventory.supplier_name"),
        _f("vehicle_reg_number", "Vehicle", TEXT, "spare_part_request.vehicles.reg_number"),
        _f("quantity", "Quantity", NUMBER),
        _f("status", "Status", STATUS),
        _f("region", "Region", TEXT, "spare_part_request.region"),
        _f("district", "District", TEXT, "spare_part_request.district"),
        _f("justification", "Justification", TEXT, "spare_part_request.justification"),
    ) + _AUDIT_FIELDS,
    default_fields=("part_name", "supplier_name", "vehicle_reg_number", "quantity", "status", "created_at"),
)

SPARE_PART_RECEIPTS = EntityGrid(
    entity_type="spare-part-receipts",
    title="Spare Part Receipts",
    endpoint="spare-part-receipt",
    fields=(
        _f("id", "Receipt ID"),
        _f("part_name", "Part Name", TEXT,
           "spare_part_dispatch.spare_part_request.spare_part_inventory.part_name"),
        _f("supplier_name", "Supplier", TEXT,
           "spare_part_dispatch.spare_part_request.spare_part_inventory.supplier_name"),
        _f("quantity", "Quantity", NUMBER, "spare_part_dispatch.spare_part_request.quantity"),
        _f("vehicle_reg_number", "Vehicle", TEXT, "vehicles.reg_number"),
        _f("region", "Region", TEXT, "spare_part_dispatch.spare_part_request.region"),
        _f("district", "District", TEXT, "spare_part_dispatch.spare_part_request.district"),
        _f("status", "Status", STATUS, "spare_part_dispatch.spare_part_request.status"),
        _f("created_at", "Created At", DATE),
    ),
    default_fields=("id", "part_name", "supplier_name", "quantity", "vehicle_reg_number", "status", "created_at"),
)


_REGISTRY: Dict[str, EntityGrid] = {
    g.entity_type: g
    for g in (
        VEHICLES,
        MAINTENANCE,
        ROADWORTHY,
        COMPANIES,
        DRIVERS,
        REPAIRS,
        FUEL_LOGS,
        INSURANCE,
        USERS,
        SPARE_PART_INVENTORY,
        SPARE_PART_REQUESTS,
        SPARE_PART_DISPATCHES,
        SPARE_PART_RECEIPTS,
    )
}


def entity_types() -> List[str]:
    return list(_REGISTRY.keys())


def get_entity(entity_type: str) -> EntityGrid:
    try:
        return _REGISTRY[entity_type]
    except KeyError:
        raise UnknownEntityError(entity_type) from None


def describe(entity_type: str) -> List[FieldDescriptor]:
    """Ordered field registry for an entity type."""
    return list(get_entity(entity_type).fields)
