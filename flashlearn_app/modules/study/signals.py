# File: flashlearn_app/modules/study/signals.py
"""
Study Module Signals
====================
Lets other code observe study sessions without depending on the engine.
Receivers must not raise; the engine logs and ignores receiver errors.
"""

from blinker import signal

# Emitted once a session has its shuffled draw
# Sender: the StudySession; kwargs: deck_id, total_cards, difficulty
study_session_started = signal('study_session_started')

# Emitted when the last card is answered
# Sender: the StudySession; kwargs: summary (SessionSummary)
study_session_completed = signal('study_session_completed')
