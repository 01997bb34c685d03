# File: flashlearn_app/modules/cards/__init__.py
from flask import Blueprint

cards_bp = Blueprint('cards', __name__)

module_metadata = {
    'name': 'Decks & Cards',
    'category': 'Content',
    'url_prefix': '/api/cards',
    'enabled': True
}

def setup_module(app):
    """Attach routes and connect signal handlers."""
    from . import routes, events
