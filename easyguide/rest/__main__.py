# easyguide/rest/__main__.py
from easyguide.rest.app import create_app

if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config.get("APP_ENV") == "development")
