"""
Resource schema declarations

A Resource is a map of field names to Schema entries plus the handlers that
implement its lifecycle. Handlers receive a ResourceData record and the API
client ("meta") and return nothing; failures propagate as exceptions.

Example:
    from zabbix_provider.schema import Resource, Schema, TYPE_STRING
    from zabbix_provider.validation import string_is_not_whitespace

    resource = Resource(
        schema={
            'name': Schema(TYPE_STRING, required=True,
                           validate_func=string_is_not_whitespace),
        },
        read=my_read,
    )
"""

from typing import Any, Callable, Dict, List, Optional

from .config import debug_log
from .errors import SchemaValidationError
from .resource_data import ResourceData
from .validation import ValidateFunc

TYPE_STRING = 'string'
TYPE_INT = 'int'
TYPE_BOOL = 'bool'
TYPE_SET = 'set'
TYPE_LIST = 'list'

Handler = Callable[[ResourceData, Any], None]
Importer = Callable[[ResourceData, Any], List[ResourceData]]


class Schema:
    """Declaration of a single field"""

    def __init__(self, type: str, required: bool = False, optional: bool = False,
                 computed: bool = False, default: Any = None, sensitive: bool = False,
                 description: str = '', validate_func: Optional[ValidateFunc] = None,
                 elem: Any = None):
        if required and (optional or default is not None):
            raise ValueError('required fields cannot be optional or have a default')
        self.type = type
        self.required = required
        self.optional = optional or not required
        self.computed = computed
        self.default = default
        self.sensitive = sensitive
        self.description = description
        self.validate_func = validate_func
        # Schema for TYPE_SET members, Resource for TYPE_LIST members
        self.elem = elem

    def zero_value(self) -> Any:
        if self.type == TYPE_INT:
            return 0
        if self.type == TYPE_BOOL:
            return False
        if self.type == TYPE_SET:
            return set()
        if self.type == TYPE_LIST:
            return []
        return ''

    def coerce(self, value: Any) -> Any:
        """
        Convert a config or API value into this field's Python type

        Zabbix returns integers as strings, so int fields accept numeric
        strings.

        Raises:
            ValueError / TypeError: If the value cannot be converted
        """
        if value is None:
            return self.zero_value()
        if self.type == TYPE_INT:
            if isinstance(value, bool):
                raise TypeError(f'expected integer, got {value!r}')
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(f'expected integer, got {value!r}')
            return int(value)
        if self.type == TYPE_BOOL:
            if isinstance(value, str):
                if value.lower() not in ('true', 'false', '1', '0'):
                    raise ValueError(f'expected boolean, got {value!r}')
                return value.lower() in ('true', '1')
            return bool(value)
        if self.type == TYPE_STRING:
            if not isinstance(value, (str, int)) or isinstance(value, bool):
                raise TypeError(f'expected string, got {value!r}')
            return str(value)
        if self.type == TYPE_SET:
            if isinstance(value, (str, bytes, dict)):
                raise TypeError(f'expected a set, got {value!r}')
            return {self.elem.coerce(v) for v in value}
        if self.type == TYPE_LIST:
            if isinstance(value, (str, bytes, dict)):
                raise TypeError(f'expected a list, got {value!r}')
            return [self.elem.coerce_block(v) for v in value]
        raise ValueError(f'unknown schema type {self.type!r}')

    def validate(self, key: str, value: Any) -> List[str]:
        try:
            coerced = self.coerce(value)
        except (TypeError, ValueError) as exc:
            return [f'{key}: {exc}']

        errors = []
        if self.type == TYPE_SET and self.elem.validate_func:
            for member in sorted(coerced):
                errors.extend(self.elem.validate_func(member, key))
        elif self.type == TYPE_LIST:
            for index, block in enumerate(value):
                errors.extend(self.elem.validate(block, prefix=f'{key}.{index}.'))
        elif self.validate_func:
            errors.extend(self.validate_func(coerced, key))
        return errors


class Resource:
    """A resource or data source: a schema plus lifecycle handlers"""

    def __init__(self, schema: Dict[str, Schema], create: Optional[Handler] = None,
                 read: Optional[Handler] = None, update: Optional[Handler] = None,
                 delete: Optional[Handler] = None, importer: Optional[Importer] = None):
        self.schema = schema
        self.create_func = create
        self.read_func = read
        self.update_func = update
        self.delete_func = delete
        self.importer = importer

    def validate(self, config: Dict[str, Any], prefix: str = '') -> List[str]:
        """
        Check config against the schema

        Returns:
            List of error messages, empty when config is valid
        """
        if not isinstance(config, dict):
            return [f'{prefix.rstrip(".")}: expected a block, got {config!r}']

        errors = []
        for key in config:
            if key not in self.schema:
                errors.append(f'{prefix}{key}: unknown field')

        for key, field in self.schema.items():
            value = config.get(key)
            if value is None:
                if field.required:
                    errors.append(f'{prefix}{key}: required field is not set')
                continue
            errors.extend(field.validate(f'{prefix}{key}', value))
        return errors

    def coerce_block(self, block: Dict[str, Any]) -> Dict[str, Any]:
        """Coerce one nested block, filling defaults"""
        if not isinstance(block, dict):
            raise TypeError(f'expected a block, got {block!r}')
        result = {}
        for key, field in self.schema.items():
            value = block.get(key)
            if value is None and field.default is not None:
                value = field.default
            result[key] = field.coerce(value)
        return result

    def check(self, config: Dict[str, Any]) -> None:
        errors = self.validate(config)
        if errors:
            raise SchemaValidationError(errors)

    def data(self, config: Optional[Dict[str, Any]] = None, id: str = '') -> ResourceData:
        """Build a ResourceData record from config values"""
        d = ResourceData(self.schema, id=id)
        for key, value in (config or {}).items():
            if value is not None:
                d.set(key, value)
        return d

    def create(self, meta: Any, config: Dict[str, Any]) -> ResourceData:
        self.check(config)
        d = self.data(config)
        self.create_func(d, meta)
        return d

    def read(self, meta: Any, state: Dict[str, Any]) -> ResourceData:
        """Refresh a resource from its stored state"""
        d = self._from_state(state)
        self.read_func(d, meta)
        return d

    def update(self, meta: Any, state: Dict[str, Any], config: Dict[str, Any]) -> ResourceData:
        """
        Apply new config to an existing resource

        Computed fields left out of config keep their value from state;
        other fields left out fall back to their default.
        """
        self.check(config)
        prior = self._from_state(state)
        d = self.data(config, id=prior.id)
        for key, field in self.schema.items():
            if field.computed and config.get(key) is None and prior.has(key):
                d.set(key, prior.get(key))
        self.update_func(d, meta)
        return d

    def delete(self, meta: Any, state: Dict[str, Any]) -> None:
        d = self._from_state(state)
        self.delete_func(d, meta)

    def import_state(self, meta: Any, id: str) -> List[ResourceData]:
        """
        Import an existing remote object by id and read it

        Returns:
            The imported records; records whose read found nothing are dropped
        """
        if self.importer is None:
            raise ValueError('resource does not support import')
        d = ResourceData(self.schema, id=id)
        imported = []
        for record in self.importer(d, meta):
            self.read_func(record, meta)
            if record.id:
                imported.append(record)
            else:
                debug_log(f'Imported id {id} not found')
        return imported

    def read_data_source(self, meta: Any, config: Dict[str, Any]) -> ResourceData:
        self.check(config)
        d = self.data(config)
        self.read_func(d, meta)
        return d

    def _from_state(self, state: Dict[str, Any]) -> ResourceData:
        state = dict(state or {})
        id = state.pop('id', '') or ''
        return self.data({k: v for k, v in state.items() if k in self.schema}, id=str(id))


def import_state_passthrough(d: ResourceData, meta: Any) -> List[ResourceData]:
    """Importer that uses the imported id as-is"""
    return [d]
