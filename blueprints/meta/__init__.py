"""
Meta Blueprint - Commit history dashboard
Handles: Summary stats, commit scatter plot with brushing, scrollytelling stories
"""

from flask import Blueprint

meta_bp = Blueprint('meta', __name__, url_prefix='/meta')

from . import routes
