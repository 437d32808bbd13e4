# File: vocabpractice_app/modules/practice/__init__.py
from flask import Blueprint

practice_bp = Blueprint('practice', __name__)

module_metadata = {
    'name': 'Student practice',
    'category': 'Learning',
    'url_prefix': '/practice',
    'enabled': True
}
