from fastapi import FastAPI
import logging
import os
import time

from Security.activity_logging import ActivityLoggingMiddleware, configure_log_files
from Security.metrics import set_encryption_enabled
from Security.request_id import RequestIdMiddleware
from Security.security_config import load_settings

from .api_routes import register_api_routes
from .auth_routes import router as auth_router
from .database import Base, build_engine, build_session_factory
from .error_handlers import register_error_handlers
from .models import check_sensitive_fields
from .record_store import EmployeeRecordStore
from .security_bootstrap import initialize_security

logger = logging.getLogger("app.main")


def create_app(settings=None, cipher_key=None, engine=None, clock=time.time) -> FastAPI:
    """Build the record service. Settings are read once, here."""
    settings = settings or load_settings()
    check_sensitive_fields(settings.sensitive_fields)
    configure_log_files(settings.log_dir)

    engine = engine or build_engine(settings.database_url)
    Base.metadata.create_all(bind=engine, checkfirst=True)
    store = EmployeeRecordStore(build_session_factory(engine))

    app = FastAPI(title="Encrypted Record Service")
    app.state.settings = settings
    app.state.security = initialize_security(settings, store, cipher_key=cipher_key, clock=clock)
    app.state.access_control = app.state.security.access_control
    set_encryption_enabled(settings.encryption_enabled)

    # last added runs first: request id must be bound before activity logging
    app.add_middleware(ActivityLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)
    register_error_handlers(app)

    app.include_router(auth_router)
    register_api_routes(app)

    logger.info(
        "Record service ready encryption_enabled=%s sensitive_fields=%s",
        settings.encryption_enabled,
        ",".join(settings.sensitive_fields),
    )
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
