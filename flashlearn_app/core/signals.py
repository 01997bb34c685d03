"""
Central Signal Registry for Event-Driven Architecture.

Uses Flask's built-in blinker integration to enable decoupled
communication between modules.

Usage:
    # Publisher (sender)
    from flashlearn_app.core.signals import user_registered
    user_registered.send(current_app._get_current_object(), user=user)

    # Subscriber (receiver) - in module's events.py
    @user_registered.connect
    def on_user_registered(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Account Signals
# ============================================
auth_signals = Namespace()

# Signal: Fired after a new account is committed
# Payload: user (User)
user_registered = auth_signals.signal('user_registered')

# ============================================
# Content Signals
# ============================================
content_signals = Namespace()

# Signal: Fired after a deck and its cards are deleted
# Payload: user_id, deck_id, cards_deleted
deck_deleted = content_signals.signal('deck_deleted')
