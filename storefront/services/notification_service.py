# storefront/services/notification_service.py
from decimal import Decimal

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zamowieniach.
    Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_placed(user_id: int, order_id: int, total: Decimal):
        send_order_placed_task.delay(user_id, order_id, str(total))


@celery_app.task(name="storefront.services.notification_service.send_order_placed_task")
def send_order_placed_task(user_id: int, order_id: int, total: str):
    """
    Celery task, w prawdziwym systemie wyslalby email z potwierdzeniem.
    Checkout jest symulowany, wiec tylko logujemy.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, total {total}")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
