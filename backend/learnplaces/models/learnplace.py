from learnplaces.extensions import db
from learnplaces.domain.block_types import MAP
from learnplaces.domain.visibility import DEFAULT_VISIBILITY
from .base import BaseModel


class Learnplace(BaseModel):
    __tablename__ = "learnplaces"

    # Id of the repository object in the host platform
    object_id = db.Column(db.Integer, unique=True, nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)

    configuration = db.relationship(
        "Configuration",
        back_populates="learnplace",
        uselist=False,
        cascade="all, delete-orphan",
    )
    location = db.relationship(
        "Location",
        back_populates="learnplace",
        uselist=False,
        cascade="all, delete-orphan",
    )

    # Every block of the learnplace, accordion children included
    all_blocks = db.relationship(
        "Block",
        back_populates="learnplace",
        order_by="Block.sequence",
        cascade="all, delete-orphan",
    )

    @property
    def blocks(self):
        """Top level blocks in display order."""
        return sorted(
            (b for b in self.all_blocks if b.accordion_id is None),
            key=lambda b: b.sequence,
        )

    def find_block(self, block_id):
        for block in self.all_blocks:
            if block.id == block_id:
                return block
        return None

    @property
    def has_map(self) -> bool:
        return any(b.type == MAP for b in self.all_blocks)


class Configuration(BaseModel):
    __tablename__ = "learnplace_configurations"

    learnplace_id = db.Column(
        db.Integer, db.ForeignKey("learnplaces.id"), unique=True, nullable=False
    )
    online = db.Column(db.Boolean, nullable=False, default=False)
    default_visibility = db.Column(db.String(32), nullable=False, default=DEFAULT_VISIBILITY)
    map_zoom_level = db.Column(db.Integer, nullable=False, default=10)

    learnplace = db.relationship("Learnplace", back_populates="configuration")


class Location(BaseModel):
    __tablename__ = "learnplace_locations"

    learnplace_id = db.Column(
        db.Integer, db.ForeignKey("learnplaces.id"), unique=True, nullable=False
    )
    latitude = db.Column(db.Float, nullable=False, default=0.0)
    longitude = db.Column(db.Float, nullable=False, default=0.0)
    elevation = db.Column(db.Float, nullable=False, default=0.0)
    radius = db.Column(db.Integer, nullable=False, default=100)  # metres

    learnplace = db.relationship("Learnplace", back_populates="location")
