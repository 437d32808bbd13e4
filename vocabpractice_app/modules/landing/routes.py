from flask import render_template

from . import landing_bp


@landing_bp.route('/')
def index():
    """
    Home page: students start practising, teachers sign in.
    """
    return render_template('landing/index.html')
