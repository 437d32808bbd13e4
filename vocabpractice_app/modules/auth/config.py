# File: vocabpractice_app/modules/auth/config.py

class AuthModuleDefaultConfig:
    AUTH_MIN_PASSWORD_LENGTH = 8
    AUTH_FULL_NAME_MAX_LENGTH = 120
    AUTH_EMAIL_MAX_LENGTH = 120
