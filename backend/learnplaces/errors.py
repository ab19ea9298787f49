from flask import current_app, jsonify
from learnplaces.domain.exceptions import (
    AccessDenied,
    InvariantViolation,
    NotFoundError,
    ValidationError,
)


def _error(name, message, status, **extra):
    response = jsonify({
        "error": name,
        "message": message,
        **extra,
    })
    response.status_code = status
    return response


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        # Echo the submitted values so the form can be shown again as sent
        return _error(
            "ValidationError",
            str(error),
            400,
            fields=error.fields,
            values=error.values,
        )

    @app.errorhandler(NotFoundError)
    def handle_not_found(error):
        return _error("NotFoundError", str(error), 404)

    @app.errorhandler(AccessDenied)
    def handle_access_denied(error):
        return _error("AccessDenied", str(error), 403)

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        current_app.logger.error("Invariant violated: %s", error)
        return _error("InvariantViolation", str(error), 400)
