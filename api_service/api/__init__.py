"""API blueprints."""

from flask import Blueprint

from api_service.api.status import status_bp
from api_service.api.users import users_bp

api_v1_bp = Blueprint("api_v1", __name__, url_prefix="/api/v1")
api_v1_bp.register_blueprint(status_bp)
api_v1_bp.register_blueprint(users_bp)
