# File: vocabpractice_app/modules/practice/config.py

class PracticeModuleDefaultConfig:
    PRACTICE_STUDENT_NAME_MAX_LENGTH = 255
    PRACTICE_SENTENCE_MAX_LENGTH = 2000
    # abandoned runs older than this are purged when a new run starts
    PRACTICE_DRAFT_MAX_AGE_HOURS = 72
