"""
Projects Blueprint - Project gallery with a year pie-chart filter
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/projects')

from . import routes
