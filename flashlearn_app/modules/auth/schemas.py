import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import AuthModuleDefaultConfig as _cfg

EMAIL_PATTERN = re.compile(r'^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$')
PASSWORD_PATTERN = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&#])')


def _check_password_strength(value: str) -> str:
    if len(value) < _cfg.PASSWORD_MIN_LENGTH:
        raise ValueError(f'Password must be at least {_cfg.PASSWORD_MIN_LENGTH} characters long')
    if not PASSWORD_PATTERN.match(value):
        raise ValueError(
            'Password must contain at least one uppercase letter, one lowercase letter, '
            'one number, and one special character'
        )
    return value


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError('Please enter a valid email')
    return value


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    username: str = Field(min_length=_cfg.USERNAME_MIN_LENGTH, max_length=_cfg.USERNAME_MAX_LENGTH)
    email: str
    password: str
    first_name: str = Field(default='', max_length=_cfg.NAME_MAX_LENGTH)
    last_name: str = Field(default='', max_length=_cfg.NAME_MAX_LENGTH)

    # Passwords are kept verbatim; everything else is trimmed
    @field_validator('username', 'first_name', 'last_name', mode='before')
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('email')
    @classmethod
    def valid_email(cls, v):
        return _normalize_email(v)

    @field_validator('password')
    @classmethod
    def password_strength(cls, v):
        return _check_password_strength(v)


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator('email')
    @classmethod
    def lower_email(cls, v):
        return v.strip().lower()


class EmailRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    email: str

    @field_validator('email')
    @classmethod
    def valid_email(cls, v):
        return _normalize_email(v)


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    token: str = Field(min_length=1)
    new_password: str

    @field_validator('new_password')
    @classmethod
    def password_strength(cls, v):
        return _check_password_strength(v)


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    current_password: str = Field(min_length=1)
    new_password: str

    @field_validator('new_password')
    @classmethod
    def password_strength(cls, v):
        return _check_password_strength(v)


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    first_name: Optional[str] = Field(default=None, max_length=_cfg.NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(default=None, max_length=_cfg.NAME_MAX_LENGTH)
    bio: Optional[str] = Field(default=None, max_length=_cfg.BIO_MAX_LENGTH)
