"""
Pages Routes - Public static pages
"""

from flask import render_template
from utils.data import load_projects
from utils.views import project_card
from . import pages_bp


@pages_bp.route('/')
def index():
    """Home page - intro plus the latest projects"""
    projects = load_projects() or []
    latest = [project_card(p, heading_level='h3') for p in projects[:3]]
    return render_template('pages/index.html', latest=latest)


@pages_bp.route('/resume/')
def resume():
    """Resume page"""
    return render_template('pages/resume.html')


@pages_bp.route('/contact/')
def contact():
    """Contact page"""
    return render_template('pages/contact.html')
