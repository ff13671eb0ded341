from sqlalchemy import Column, Integer, String
from shortlink_app.database.connection import Base


class URLEntry(Base):
    """
    Row form of a store Entry, used by the SQLite persistence backend.
    
    The table mirrors the flat file: one row per short code,
    rewritten wholesale on every save.
    """
    __tablename__ = "url_entries"

    short_code = Column(String(64), primary_key=True)
    original_url = Column(String, nullable=False)
    hit_count = Column(Integer, nullable=False, default=1)
    position = Column(Integer, nullable=False, default=0)  # Store iteration order
