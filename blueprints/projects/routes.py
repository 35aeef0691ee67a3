"""
Projects Routes - Gallery filtered by search text and by year
"""

from flask import render_template, request, jsonify
from utils.charts import pie_chart
from utils.data import load_projects
from utils.selection import state_from_args
from utils.views import FilterView, project_card, serialize_page
from . import projects_bp


gallery = FilterView(
    title='Projects',
    key_fn=lambda project: project.year,
    chart_fn=lambda visible, buckets, state: pie_chart(buckets, state),
    card_fn=project_card,
)


@projects_bp.route('/')
def index():
    """Project gallery"""
    projects = load_projects()
    state = state_from_args(request.args)
    view = gallery.render(projects or [], state)
    return render_template('projects.html',
                           view=view,
                           data_loaded=projects is not None)


@projects_bp.route('/data')
def data():
    """Gallery view tree as JSON"""
    projects = load_projects()
    if projects is None:
        return jsonify({'success': False, 'error': 'Project data unavailable'}), 503
    view = gallery.render(projects, state_from_args(request.args))
    return jsonify({'success': True, 'view': serialize_page(view)})
