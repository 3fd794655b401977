from celery import shared_task

from apps.offers.services import expire_overdue_offers as expire_overdue


@shared_task(bind=True, autoretry_for=(Exception,), retry_kwargs={"max_retries": 3})
def expire_overdue_offers(self):
    return expire_overdue()
