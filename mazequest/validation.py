"""Lightweight request payload validation utilities.

Provides minimal schema-like checking with clear, consistent error responses
for the JSON API. Not a general JSON Schema implementation.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int'
Extras:
  str: max_len, min_len, allow_empty
  int: min_value, max_value
  any: nullable (explicit null accepted and treated as absent)

Example:
 ok, data_or_err = validate({'dir': 'up'}, MOVE)

If invalid: (False, {'field': 'dir', 'error': 'too long', 'code': 'max_len'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': str,
    'int': int,
}

MAX_DIMENSION = 201


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        if not isinstance(spec, tuple) or len(spec) < 2:
            return _fail('__schema__', f'invalid spec for {name}', 'schema')
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or (payload[name] is None and extras.get('nullable')):
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        py_type = PRIMITIVES[type_name]
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, py_type) or isinstance(value, bool):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            s = value.strip() if not extras.get('allow_empty') else value
            if not extras.get('allow_empty') and len(s) == 0:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(value) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(value) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            out[name] = s
        elif type_name == 'int':
            if 'min_value' in extras and value < extras['min_value']:
                return _fail(name, f'must be >= {extras["min_value"]}', 'min_value')
            if 'max_value' in extras and value > extras['max_value']:
                return _fail(name, f'must be <= {extras["max_value"]}', 'max_value')
            out[name] = value
    return True, out


# Predefined schemas used by the maze API
NEW_GAME = {
    'rows': ('int', False, {'nullable': True, 'max_value': MAX_DIMENSION}),
    'cols': ('int', False, {'nullable': True, 'max_value': MAX_DIMENSION}),
    'seed': ('int', False, {'nullable': True, 'min_value': 0}),
    'variant': ('str', False, {'nullable': True, 'max_len': 32}),
}
MOVE = {
    'dir': ('str', True, {'min_len': 1, 'max_len': 16}),
}
