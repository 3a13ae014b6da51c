"""WSGI entry point for production deployment."""
import os
from app import create_app
from database import ensure_schema

application = create_app(os.environ.get('FLASK_ENV', 'production'))

with application.app_context():
    ensure_schema()
