# File: flashlearn_app/modules/cards/events.py
"""
Cards Module Event Handlers
===========================
Listens for account events and prepares starter content.
"""
from flask import current_app
from flashlearn_app.core.extensions import db
from flashlearn_app.core.signals import user_registered
from .services.seed_service import SeedService


@user_registered.connect
def create_seed_deck_for_new_user(sender, user=None, **kwargs):
    """A failed seed must never undo the registration that triggered it."""
    if user is None:
        return
    try:
        SeedService.create_seed_deck(user.user_id)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to create seed deck for user {user.user_id}: {e}")
