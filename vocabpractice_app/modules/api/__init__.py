# File: vocabpractice_app/modules/api/__init__.py
from flask import Blueprint

api_bp = Blueprint('api', __name__)

module_metadata = {
    'name': 'JSON API',
    'category': 'System',
    'url_prefix': '/api',
    'enabled': True
}
