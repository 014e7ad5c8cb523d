"""Map generation API routes.

Thin request/response layer around the generator: coerce and validate the
parameters, build the map once (cached per parameter tuple), remember the
parameters of every map handed out, and re-derive stored maps from their seed.
"""
import hashlib
import os
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from bspmap import db
from bspmap.logging_utils import get_logger
from bspmap.mapgen import MapConfig, MapConfigError, TileMap
from bspmap.mapgen.config import SEED_LIMIT
from bspmap.models import GeneratedMap
from bspmap.validation import MAP_REQUEST, parse_pair, validate

bp_maps = Blueprint('map_api', __name__)
log = get_logger("bspmap.api")

_map_cache = {}
_map_cache_lock = threading.Lock()


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into an unsigned 32-bit int."""
    if payload_seed is None:
        return random.randint(0, SEED_LIMIT - 1)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_LIMIT
    s = payload_seed.strip()
    if not s:
        return random.randint(0, SEED_LIMIT - 1)
    if s.isdecimal():
        return int(s) % SEED_LIMIT
    h = hashlib.sha256(s.encode('utf-8')).digest()
    return int.from_bytes(h[:4], 'big')


def get_cached_map(config: MapConfig) -> TileMap:
    config = config.with_seed()
    if os.environ.get("BSPMAP_DISABLE_CACHE") == "1":
        return TileMap(config)
    key = config.key()
    with _map_cache_lock:
        tilemap = _map_cache.get(key)
    if tilemap is not None:
        return tilemap
    tilemap = TileMap(config)
    cache_max = current_app.config.get("BSPMAP_MAP_CACHE_MAX", 32)
    with _map_cache_lock:
        _map_cache[key] = tilemap
        if len(_map_cache) > cache_max:
            first_key = next(iter(_map_cache.keys()))
            if first_key != key:
                _map_cache.pop(first_key, None)
    return tilemap


def clear_map_cache():
    with _map_cache_lock:
        _map_cache.clear()


def _build_config(params) -> MapConfig:
    cfg = current_app.config
    min_room = params.get('min_room') or parse_pair(cfg['BSPMAP_DEFAULT_MIN_ROOM'])
    max_room = params.get('max_room') or parse_pair(cfg['BSPMAP_DEFAULT_MAX_ROOM'])
    config = MapConfig(
        width=params.get('width', cfg['BSPMAP_DEFAULT_WIDTH']),
        height=params.get('height', cfg['BSPMAP_DEFAULT_HEIGHT']),
        seed=_coerce_seed(params.get('seed')),
        min_room_width=min_room[0],
        min_room_height=min_room[1],
        max_room_width=max_room[0],
        max_room_height=max_room[1],
    )
    return config.validate()


def _serialize(tilemap: TileMap, record=None, index=None):
    cfg = tilemap.config
    out = {
        "seed": tilemap.seed,
        "width": tilemap.width,
        "height": tilemap.height,
        "min_room": [cfg.min_room_width, cfg.min_room_height],
        "max_room": [cfg.max_room_width, cfg.max_room_height],
        "rows": tilemap.rows(),
        "map": tilemap.render(),
        "metrics": {k: v for k, v in tilemap.metrics.items() if k != "runtime_ms"},
    }
    if record is not None:
        out["id"] = record.id
    if index is not None:
        out["index"] = index
    return out


def _bad_request(err):
    log.info(event="map_request_rejected", field=err.get('field'), code=err.get('code'))
    return jsonify(err), 400


@bp_maps.errorhandler(MapConfigError)
def _config_error(e: MapConfigError):
    log.info(event="map_config_rejected", field=e.field, reason=e.reason)
    return jsonify({"error": e.reason, "field": e.field, "code": "config"}), 400


@bp_maps.route('/api/maps', methods=['POST'])
def create_map():
    """Generate a map and remember its parameters.

    Body JSON (all optional):
      { "seed": <int|str|null>, "width": <int>, "height": <int>,
        "min_room": [w, h] | "w,h", "max_room": [w, h] | "w,h" }
    - Missing or empty seed => random 32-bit seed.
    - Numeric strings are used directly; other strings are hashed.

    Response 201: map payload plus "id" and "index".
    """
    data = request.get_json(silent=True) or {}
    ok, params = validate(data, MAP_REQUEST)
    if not ok:
        return _bad_request(params)
    config = _build_config(params)
    tilemap = get_cached_map(config)
    record = GeneratedMap.from_tilemap(tilemap)
    db.session.add(record)
    db.session.commit()
    index = GeneratedMap.query.filter(GeneratedMap.id < record.id).count()
    log.info(event="map_created", id=record.id, index=index, seed=tilemap.seed, width=tilemap.width, height=tilemap.height)
    return jsonify(_serialize(tilemap, record, index)), 201


@bp_maps.route('/api/maps/count', methods=['GET'])
def map_count():
    return jsonify({"count": GeneratedMap.query.count()})


@bp_maps.route('/api/maps/<int:index>', methods=['GET'])
def get_map(index: int):
    record = GeneratedMap.query.order_by(GeneratedMap.id).offset(index).first()
    if record is None:
        return jsonify({"error": f"no map at index {index}", "code": "not_found"}), 404
    tilemap = get_cached_map(record.to_config())
    return jsonify(_serialize(tilemap, record, index))


@bp_maps.route('/api/maps', methods=['DELETE'])
def clear_maps():
    cleared = GeneratedMap.query.delete()
    db.session.commit()
    clear_map_cache()
    log.info(event="maps_cleared", cleared=cleared)
    return jsonify({"cleared": cleared})


@bp_maps.route('/api/maps/preview', methods=['GET'])
def preview_map():
    """Generate from query parameters without storing anything."""
    data = {}
    for key in ('seed', 'min_room', 'max_room'):
        if key in request.args:
            data[key] = request.args[key]
    for key in ('width', 'height'):
        if key in request.args:
            raw = request.args[key]
            data[key] = int(raw) if raw.isdecimal() else raw
    ok, params = validate(data, MAP_REQUEST)
    if not ok:
        return _bad_request(params)
    tilemap = get_cached_map(_build_config(params))
    return jsonify(_serialize(tilemap))
