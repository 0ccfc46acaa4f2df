"""
Flat key/value record store for one resource instance

Reads fall back to the field's default, then to the type's zero value, so
handlers can read any declared field without checking whether it was set.
"""

from typing import Any, Dict, Tuple


class ResourceData:
    """Field values and identity of a single resource"""

    def __init__(self, schema: Dict[str, Any], id: str = ''):
        self._schema = schema
        self._values: Dict[str, Any] = {}
        self._id = id or ''

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, id: str) -> None:
        """Set the identity; an empty id marks the resource as gone"""
        self._id = str(id) if id else ''

    def _field(self, key: str) -> Any:
        if key not in self._schema:
            raise KeyError(f'{key} is not a field of this resource')
        return self._schema[key]

    def fields(self):
        return list(self._schema)

    def has(self, key: str) -> bool:
        self._field(key)
        return key in self._values

    def get(self, key: str) -> Any:
        field = self._field(key)
        if key in self._values:
            return self._values[key]
        if field.default is not None:
            return field.default
        return field.zero_value()

    def get_ok(self, key: str) -> Tuple[Any, bool]:
        """
        Get a value and whether it is set to something other than the zero value

        Returns:
            (value, ok) tuple
        """
        value = self.get(key)
        return value, value != self._field(key).zero_value()

    def set(self, key: str, value: Any) -> None:
        """
        Set a field, converting it to the field's type

        Raises:
            KeyError: If key is not declared in the schema
            ValueError / TypeError: If the value cannot be converted
        """
        self._values[key] = self._field(key).coerce(value)

    def state(self) -> Dict[str, Any]:
        """Snapshot of identity and every field; sets are returned sorted"""
        snapshot: Dict[str, Any] = {'id': self._id}
        for key in self._schema:
            value = self.get(key)
            if isinstance(value, set):
                value = sorted(value)
            snapshot[key] = value
        return snapshot
