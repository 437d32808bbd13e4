"""
Central signal registry.

Uses blinker namespaces so that modules can react to writes without
depending on each other.

Usage:
    # Publisher
    from vocabpractice_app.core.signals import submission_completed
    submission_completed.send(None, submission_id=1, word_set_id=2, ...)

    # Subscriber
    @submission_completed.connect
    def on_submission_completed(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Word Set Manager Signals
# ============================================
word_set_signals = Namespace()

# Payload: teacher_id, word_set_id, title, word_count
word_set_created = word_set_signals.signal('word-set-created')

# Payload: teacher_id, word_set_id
word_set_deleted = word_set_signals.signal('word-set-deleted')

# Payload: teacher_id, word_set_id, word_count
words_replaced = word_set_signals.signal('words-replaced')

# Payload: teacher_id, word_set_id, student_name, deleted_count
student_progress_restarted = word_set_signals.signal('student-progress-restarted')

# ============================================
# Practice Signals
# ============================================
practice_signals = Namespace()

# Payload: submission_id, word_set_id, student_name, answer_count
submission_completed = practice_signals.signal('submission-completed')

ALL_SIGNALS = (
    word_set_created,
    word_set_deleted,
    words_replaced,
    student_progress_restarted,
    submission_completed,
)
