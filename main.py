from shortlink_app.config import settings
from shortlink_app.app_factory import create_app

# Create FastAPI app (also servable lazily: uvicorn shortlink_app.app_factory:create_app --factory)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
