from flask import jsonify, current_app
from sitebuilder.domain.invariants.exceptions import CmsError, PersistenceFailure

def register_error_handlers(app):
    @app.errorhandler(CmsError)
    def handle_cms_error(error):
        if isinstance(error, PersistenceFailure):
            current_app.logger.error("Persistence failure: %s", error.message)

        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response
