# File: vocabpractice_app/modules/landing/__init__.py
from flask import Blueprint

landing_bp = Blueprint('landing', __name__)

module_metadata = {
    'name': 'Home',
    'category': 'System',
    'enabled': True
}
