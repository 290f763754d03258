# easyguide/payment/wsgi.py
from easyguide.payment.app import create_app

# For gunicorn
app = create_app()
