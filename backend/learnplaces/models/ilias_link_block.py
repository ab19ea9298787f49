from learnplaces.extensions import db
from .base import BaseModel


class ILIASLinkBlock(BaseModel):
    """Links a block to a host repository object by reference id."""

    __tablename__ = "ilias_link_blocks"

    ref_id = db.Column(db.Integer, nullable=False)
    fk_block_id = db.Column(
        db.Integer,
        db.ForeignKey("blocks.id", ondelete="CASCADE"),
        unique=True,
        nullable=True,
    )

    block = db.relationship("Block", back_populates="link")
