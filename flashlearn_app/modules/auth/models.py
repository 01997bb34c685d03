from __future__ import annotations
import secrets
from datetime import timedelta
from flask_login import UserMixin
from sqlalchemy.sql import func
from werkzeug.security import check_password_hash, generate_password_hash
from flashlearn_app.core.extensions import db
from flashlearn_app.utils.time_utils import ensure_utc, isoformat_or_none, utcnow
from .config import AuthModuleDefaultConfig


class User(UserMixin, db.Model):
    """Application user model."""
    __tablename__ = 'users'

    ROLE_ADMIN = 'admin'
    ROLE_USER = 'user'

    user_id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(30), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    user_role = db.Column(db.String(20), default=ROLE_USER, nullable=False)

    is_email_verified = db.Column(db.Boolean, default=False, nullable=False)
    email_verification_token = db.Column(db.String(64), nullable=True, index=True)
    email_verification_expires = db.Column(db.DateTime(timezone=True), nullable=True)
    password_reset_token = db.Column(db.String(64), nullable=True, index=True)
    password_reset_expires = db.Column(db.DateTime(timezone=True), nullable=True)

    first_name = db.Column(db.String(50), default='')
    last_name = db.Column(db.String(50), default='')
    bio = db.Column(db.String(500), default='')
    avatar_url = db.Column(db.String(255), nullable=True)

    study_streak = db.Column(db.Integer, default=0, nullable=False)
    last_study_date = db.Column(db.DateTime(timezone=True), nullable=True)
    last_login_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    decks = db.relationship('Deck', backref='creator', lazy=True, cascade='all, delete-orphan')

    def get_id(self):
        return str(self.user_id)

    @property
    def is_admin(self) -> bool:
        return self.user_role == self.ROLE_ADMIN

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def generate_email_verification_token(self) -> str:
        token = secrets.token_hex(32)
        self.email_verification_token = token
        self.email_verification_expires = utcnow() + timedelta(hours=AuthModuleDefaultConfig.EMAIL_VERIFICATION_HOURS)
        return token

    def generate_password_reset_token(self) -> str:
        token = secrets.token_hex(32)
        self.password_reset_token = token
        self.password_reset_expires = utcnow() + timedelta(hours=AuthModuleDefaultConfig.PASSWORD_RESET_HOURS)
        return token

    def email_verification_valid(self) -> bool:
        expires = ensure_utc(self.email_verification_expires)
        return bool(self.email_verification_token) and expires is not None and expires > utcnow()

    def password_reset_valid(self) -> bool:
        expires = ensure_utc(self.password_reset_expires)
        return bool(self.password_reset_token) and expires is not None and expires > utcnow()

    def to_dict(self) -> dict:
        """Public representation; never includes the hash or any token."""
        return {
            'user_id': self.user_id,
            'username': self.username,
            'email': self.email,
            'role': self.user_role,
            'is_email_verified': self.is_email_verified,
            'profile': {
                'first_name': self.first_name or '',
                'last_name': self.last_name or '',
                'bio': self.bio or '',
                'avatar_url': self.avatar_url,
            },
            'study_streak': self.study_streak,
            'last_study_date': isoformat_or_none(self.last_study_date),
            'last_login_at': isoformat_or_none(self.last_login_at),
            'created_at': isoformat_or_none(self.created_at),
            'updated_at': isoformat_or_none(self.updated_at),
        }

    def __repr__(self):
        return f'<User {self.username}>'
