# easyguide/notification/wsgi.py
from easyguide.notification.app import create_app

# For gunicorn
app = create_app()
