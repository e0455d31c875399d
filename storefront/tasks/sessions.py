# storefront/tasks/sessions.py
from storefront.celery_worker import celery_app
from storefront.data.database import make_engine, make_session_factory
from storefront.services.auth_service import AuthService
from storefront.utils.settings import DATABASE_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="storefront.tasks.sessions.purge_expired_sessions_task")
def purge_expired_sessions_task(database_url: str | None = None):
    logger.info("Purge expired sessions task started")

    engine = make_engine(database_url or DATABASE_URL)
    db = make_session_factory(engine)()
    try:
        return AuthService(db).purge_expired_sessions()
    finally:
        db.close()
        engine.dispose()
