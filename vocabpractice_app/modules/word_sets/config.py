# File: vocabpractice_app/modules/word_sets/config.py

class WordSetsModuleDefaultConfig:
    WORD_SET_TITLE_MAX_LENGTH = 255
    WORD_MAX_LENGTH = 255
    # Blank rows shown when the create form first renders
    WORD_SET_FORM_MIN_ROWS = 1
