import datetime

from bspmap import db
from bspmap.mapgen import MapConfig


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class GeneratedMap(db.Model):
    """Parameters of a map handed out by the API.

    Only the inputs are stored; the grid is re-derived from the seed on read.
    """

    __tablename__ = 'generated_maps'
    id = db.Column(db.Integer, primary_key=True)
    seed = db.Column(db.BigInteger, nullable=False)
    width = db.Column(db.Integer, nullable=False)
    height = db.Column(db.Integer, nullable=False)
    min_room_width = db.Column(db.Integer, nullable=False)
    min_room_height = db.Column(db.Integer, nullable=False)
    max_room_width = db.Column(db.Integer, nullable=False)
    max_room_height = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=_utcnow)
    # Small summary (room / corridor counts), never the grid
    map_metadata = db.Column(db.JSON, default=dict)

    def to_config(self) -> MapConfig:
        return MapConfig(
            width=self.width,
            height=self.height,
            seed=self.seed,
            min_room_width=self.min_room_width,
            min_room_height=self.min_room_height,
            max_room_width=self.max_room_width,
            max_room_height=self.max_room_height,
        )

    @classmethod
    def from_tilemap(cls, tilemap):
        cfg = tilemap.config
        return cls(
            seed=cfg.seed,
            width=cfg.width,
            height=cfg.height,
            min_room_width=cfg.min_room_width,
            min_room_height=cfg.min_room_height,
            max_room_width=cfg.max_room_width,
            max_room_height=cfg.max_room_height,
            map_metadata={
                'rooms': tilemap.metrics['rooms'],
                'corridor_segments': tilemap.metrics['corridor_segments'],
                'tiles_floor': tilemap.metrics['tiles_floor'],
            },
        )

    def __repr__(self):
        return f'<GeneratedMap {self.id} seed={self.seed} {self.width}x{self.height}>'
