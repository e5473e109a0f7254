from celery import Celery

from leadintake.core.config import settings

celery_app = Celery(
    "leadintake",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["leadintake.tasks.notification_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    broker_connection_retry_on_startup=True,
    # Publishing happens inside a request; a dead broker must fail fast
    broker_connection_timeout=2,
    broker_transport_options={"socket_connect_timeout": 2, "socket_timeout": 2},
    task_publish_retry_policy={"max_retries": 1, "interval_start": 0, "interval_step": 0.2, "interval_max": 0.5},
    task_ignore_result=True,
    task_routes={
        "leadintake.tasks.notification_tasks.*": {"queue": "priority"},
    },
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
)

if __name__ == "__main__":
    celery_app.start()
