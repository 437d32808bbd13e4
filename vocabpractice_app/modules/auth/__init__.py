# File: vocabpractice_app/modules/auth/__init__.py
from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

module_metadata = {
    'name': 'Teacher sign-in',
    'category': 'System',
    'url_prefix': '/auth',
    'enabled': True
}
