# easyguide/data/wsgi.py
from easyguide.data.app import create_app

# For gunicorn
app = create_app()
