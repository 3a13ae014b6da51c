"""
Service-level API routes.
"""

from flask import Blueprint, current_app

from database import get_db
from utils.api_response import api_success

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status, version and database reachability
    """
    get_db().execute('SELECT 1').fetchone()

    return api_success(data={
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'Rose Garden Reservations'),
    })
