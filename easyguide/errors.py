# easyguide/errors.py
from flask import jsonify
from werkzeug.exceptions import HTTPException


ERROR_CODES = {
    "success": 0,
    "not_found": 1,
    "validation": 400,
    "validation__invalid_email": 4001,
    "authorization__invalid_credentials_error": "authorization__invalid_credentials_error",
    "notAcceptable": 406,
    "conflict": 409,
    "security__unauthorized_error": 2001,
    "security__invalid_token_error": 2020,
    "security__invalid_confirm_token_error": 2030,
    "security__no_permissions": 403,
    "security__blocked": 4003,
    "transaction__error": 2409,
    "internal_server_error": 500,
}


class ApplicationError(Exception):
    """Error carried back to the client as ``{errorCode, errorMessage, errors}``."""

    def __init__(self, status_code=500, error_code=ERROR_CODES["internal_server_error"],
                 error_message="Internal server error", errors=None):
        super().__init__(error_message)
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        self.errors = errors or []

    def to_dict(self):
        return {
            "errorCode": self.error_code,
            "errorMessage": self.error_message,
            "errors": self.errors,
        }

    def __repr__(self):
        return f"<ApplicationError {self.status_code} {self.error_code}: {self.error_message}>"


def unauthorized_error(message="Unauthorized"):
    return ApplicationError(401, ERROR_CODES["security__unauthorized_error"], message)


def transaction_error(message="Transaction error"):
    return ApplicationError(500, ERROR_CODES["transaction__error"], message)


def not_found_error(message):
    return ApplicationError(404, ERROR_CODES["not_found"], message)


def conflict_error(message, errors=None):
    return ApplicationError(409, ERROR_CODES["conflict"], message, errors)


def success(result_data=None, status=200):
    return jsonify({"errorCode": ERROR_CODES["success"], "resultData": result_data}), status


def register_error_handlers(app):
    @app.errorhandler(ApplicationError)
    def _application_error(e: ApplicationError):
        if e.status_code >= 500:
            app.logger.error("[ERROR] %r", e)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        body = {"errorCode": e.code, "errorMessage": e.description or e.name, "errors": []}
        return jsonify(body), e.code

    @app.errorhandler(Exception)
    def _unexpected_error(e: Exception):
        app.logger.exception("[ERROR] Unhandled exception: %s", e)
        body = {
            "errorCode": ERROR_CODES["internal_server_error"],
            "errorMessage": f"Internal server error: {e}",
            "errors": [],
        }
        return jsonify(body), 500
