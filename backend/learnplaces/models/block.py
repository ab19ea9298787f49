from learnplaces.extensions import db
from learnplaces.domain.visibility import DEFAULT_VISIBILITY
from .base import BaseModel

class Block(BaseModel):
    __tablename__ = "blocks"

    learnplace_id = db.Column(db.Integer, db.ForeignKey("learnplaces.id"), nullable=False, index=True)
    # Set when the block lives inside an accordion block
    accordion_id = db.Column(db.Integer, db.ForeignKey("blocks.id"), nullable=True, index=True)

    type = db.Column(db.String(32), nullable=False)  # rich_text, picture, video, ilias_link, map, accordion
    sequence = db.Column(db.Integer, nullable=False, default=0)
    visibility = db.Column(db.String(32), nullable=False, default=DEFAULT_VISIBILITY)
    content = db.Column(db.JSON, default=dict)
    media_url = db.Column(db.String(512), nullable=True) # picture and video uploads

    learnplace = db.relationship("Learnplace", back_populates="all_blocks")
    link = db.relationship(
        "ILIASLinkBlock",
        back_populates="block",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.Index("idx_block_container_sequence", "learnplace_id", "accordion_id", "sequence"),
    )

    @property
    def children(self):
        """Blocks held by this accordion, in display order."""
        if self.learnplace is None or self.id is None:
            return []
        return sorted(
            (b for b in self.learnplace.all_blocks if b.accordion_id == self.id),
            key=lambda b: b.sequence,
        )
