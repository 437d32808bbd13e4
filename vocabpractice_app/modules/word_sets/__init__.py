# File: vocabpractice_app/modules/word_sets/__init__.py
from flask import Blueprint

word_sets_bp = Blueprint('word_sets', __name__)

module_metadata = {
    'name': 'Word sets',
    'category': 'Teaching',
    'url_prefix': '/teacher',
    'enabled': True
}
