# easyguide/notification/worker.py
"""
    celery -A easyguide.notification.worker worker -Q mail
"""
from easyguide.container import get_container
from easyguide.notification.app import create_app

app = create_app()
celery_app = get_container(app).get("celery")
