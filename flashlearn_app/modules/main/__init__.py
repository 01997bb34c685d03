# File: flashlearn_app/modules/main/__init__.py
from flask import Blueprint

main_bp = Blueprint('main', __name__)

module_metadata = {
    'name': 'Main',
    'category': 'System',
    'url_prefix': '/api',
    'enabled': True
}

def setup_module(app):
    from . import routes
