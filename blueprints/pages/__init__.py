"""
Pages Blueprint - Public static pages
Handles: Home, Resume, Contact
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
