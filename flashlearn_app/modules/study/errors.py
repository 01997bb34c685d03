class StudySessionError(Exception):
    """Base exception for the study-session engine."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class EmptySetError(StudySessionError):
    """No card in the deck matches the requested filter; no session is created."""
    def __init__(self, deck_id, difficulty=None):
        self.deck_id = deck_id
        self.difficulty = difficulty
        label = f"{difficulty} " if difficulty else ""
        super().__init__(f"No {label}cards found in this deck. Add some cards first!")


class FetchError(StudySessionError):
    """Loading the candidate cards failed (transport, auth or server error)."""
    def __init__(self, message: str = "Failed to load cards. Please try again.", status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class SyncError(StudySessionError):
    """A per-answer statistics write failed. Absorbed by the engine, only logged."""
    def __init__(self, message: str, card_id=None, status_code: int = None):
        self.card_id = card_id
        self.status_code = status_code
        super().__init__(message)


class InvalidTransitionError(StudySessionError):
    """The requested action is not available in the session's current phase."""
    def __init__(self, action: str, phase):
        self.action = action
        self.phase = phase
        super().__init__(f"Cannot {action} while the session is {getattr(phase, 'value', phase)}")
