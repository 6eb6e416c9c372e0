from typing import Any, Mapping


def resolve(record: Mapping[str, Any], path: str) -> Any:
    """Safely retrieve a (possibly nested) value from a record.

    "vehicles.reg_number" walks record["vehicles"]["reg_number"]. A missing
    segment, or an intermediate that is not a mapping, yields None.
    """
    if not isinstance(record, Mapping):
        return None
    if path in record:
        return record[path]
    if "." not in path:
        return None

    value: Any = record
    for segment in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(segment)
        if value is None:
            return None
    return value
