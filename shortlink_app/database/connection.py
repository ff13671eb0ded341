from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker


Base = declarative_base()


def create_session_factory(database_url: str) -> sessionmaker:
    """
    Create an engine for database_url, make sure the tables exist,
    and return a session factory bound to it.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are opened from FastAPI's worker threads
        connect_args["check_same_thread"] = False
    
    engine = create_engine(database_url, connect_args=connect_args)
    
    # Import models to ensure they're registered with Base
    from shortlink_app.models import URLEntry  # noqa: F401
    Base.metadata.create_all(bind=engine)
    
    return sessionmaker(autoflush=False, bind=engine)
