# easyguide/notification/__main__.py
from easyguide.notification.app import create_app

if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config["APP_ENV"] == "development")
