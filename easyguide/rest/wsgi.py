# easyguide/rest/wsgi.py
from easyguide.rest.app import create_app

# For gunicorn
app = create_app()
