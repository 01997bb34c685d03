# File: flashlearn_app/modules/auth/config.py

class AuthModuleDefaultConfig:
    USERNAME_MIN_LENGTH = 3
    USERNAME_MAX_LENGTH = 30
    PASSWORD_MIN_LENGTH = 8
    PASSWORD_SPECIAL_CHARS = '@$!%*?&#'
    NAME_MAX_LENGTH = 50
    BIO_MAX_LENGTH = 500
    EMAIL_VERIFICATION_HOURS = 24
    PASSWORD_RESET_HOURS = 1
