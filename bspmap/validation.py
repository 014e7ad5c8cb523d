"""Lightweight request payload validation for the map API.

Minimal schema-like checking with clear, consistent error responses; not a
general JSON Schema implementation.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types:
  'int'   plain integer (bool rejected); extras: min, max
  'str'   string; extras: max_len
  'seed'  int or str (coerced later by the API)
  'pair'  [w, h] list of two ints, or a "W,H" string; normalized to a tuple

Example:
 ok, data_or_err = validate({'width': 30}, MAP_REQUEST)

If invalid: (False, {'field': 'width', 'error': 'expected int', 'code': 'type'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

TYPES = {'int', 'str', 'seed', 'pair'}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def parse_pair(value: Any) -> Optional[Tuple[int, int]]:
    """Return (a, b) from [a, b] or "a,b"; None when the value is malformed."""
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(',')]
        if len(parts) != 2 or not all(p.isdecimal() for p in parts):
            return None
        return int(parts[0]), int(parts[1])
    if isinstance(value, (list, tuple)) and len(value) == 2:
        if all(isinstance(v, int) and not isinstance(v, bool) for v in value):
            return value[0], value[1]
    return None


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, rule in schema.items():
        type_name, required = rule[0], rule[1]
        extras = rule[2] if len(rule) > 2 else {}
        if type_name not in TYPES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        if type_name == 'int':
            if isinstance(value, bool) or not isinstance(value, int):
                return _fail(name, 'expected int', 'type')
            if 'min' in extras and value < extras['min']:
                return _fail(name, f"must be >= {extras['min']}", 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, f"must be <= {extras['max']}", 'max')
            out[name] = value
        elif type_name == 'str':
            if not isinstance(value, str):
                return _fail(name, 'expected str', 'type')
            if 'max_len' in extras and len(value) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            out[name] = value.strip()
        elif type_name == 'seed':
            if isinstance(value, bool) or not isinstance(value, (int, str)):
                return _fail(name, 'expected int or str', 'type')
            if isinstance(value, str) and len(value) > extras.get('max_len', 256):
                return _fail(name, 'too long', 'max_len')
            out[name] = value
        elif type_name == 'pair':
            pair = parse_pair(value)
            if pair is None:
                return _fail(name, 'expected [width, height] or "W,H"', 'pair')
            out[name] = pair
    return True, out


# Predefined schemas used by handlers
MAP_REQUEST = {
    'seed': ('seed', False, {'max_len': 256}),
    'width': ('int', False, {'min': 1, 'max': 1024}),
    'height': ('int', False, {'min': 1, 'max': 1024}),
    'min_room': ('pair', False),
    'max_room': ('pair', False),
}
