from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class Link(Base):
    __tablename__ = "links"

    # Sole input to the codec; never renumbered
    id = Column(Integer, primary_key=True, autoincrement=True)

    source = Column(String(2048), nullable=False)

    # Always LinkCodec.encode(id). Nullable only while the "database" identifier
    # strategy waits for the store to assign the id inside the insert transaction.
    code = Column(String(64), unique=True, index=True, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self):
        return f"<Link id={self.id} code={self.code!r}>"
