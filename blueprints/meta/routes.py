"""
Meta Routes - Commit history dashboard
Handles: Stats, scatter plot, brushing, commit and file scrollytelling

Each call carries the full state (query, selected, offset) and the server
recomputes the window, aggregates and charts from scratch.
"""

from functools import partial
from flask import render_template, request, jsonify, current_app
from utils.aggregate import (
    commit_stats, files_by_last_commit, group_files, process_commits
)
from utils.charts import (
    Brush, TOOLTIP_OFFSET, brush_summary, cumulative_chart, scatter_plot, tooltip_view
)
from utils.data import load_lines
from utils.selection import SelectionState, parse_int, state_from_args
from utils.views import FilterView, commit_item, file_item, files_view, serialize_page
from . import meta_bp

STORIES = ('commits', 'files')


def commit_story():
    """Commits windowed by scroll position, plotted by time of day"""
    cfg = current_app.config
    return FilterView(
        title='Commits',
        key_fn=lambda commit: commit.author,
        chart_fn=lambda visible, buckets, state: scatter_plot(visible),
        card_fn=partial(commit_item, item_height=cfg['ITEM_HEIGHT']),
        visible_count=cfg['VISIBLE_COUNT'],
        item_height=cfg['ITEM_HEIGHT'],
    )


def file_story(commits):
    """Files in order of last change, with the cumulative line chart"""
    cfg = current_app.config
    return FilterView(
        title='Files',
        key_fn=lambda summary: summary.primary_type,
        chart_fn=lambda visible, buckets, state: cumulative_chart(
            commits, visible[0] if visible else None),
        card_fn=partial(file_item, item_height=cfg['ITEM_HEIGHT']),
        visible_count=cfg['VISIBLE_COUNT'],
        item_height=cfg['ITEM_HEIGHT'],
    )


def load_history():
    """(lines, commits, files), or None when the line data is unavailable"""
    lines = load_lines()
    if lines is None:
        return None
    commits = process_commits(lines, current_app.config['COMMIT_URL_BASE'])
    return lines, commits, files_by_last_commit(lines)


def render_story(story, history, state, offset):
    """PageView plus the unit chart of whatever the window shows"""
    lines, commits, files = history
    if story == 'files':
        # the search box and author legend only drive the commit story
        view = file_story(commits).render(files, SelectionState(), offset)
        units = files_view(view.visible)
    else:
        view = commit_story().render(commits, state, offset)
        units = files_view(group_files([line for c in view.visible for line in c.lines]))
    return view, units


def spacer_height(view):
    return max(view.list.count - 1, 0) * current_app.config['ITEM_HEIGHT']


@meta_bp.route('/')
def index():
    """Dashboard page"""
    history = load_history()
    if history is None:
        return render_template('meta.html', data_loaded=False)

    lines, commits, files = history
    state = state_from_args(request.args)
    commits_view, commit_units = render_story('commits', history, state, 0)
    files_page, file_units = render_story('files', history, state, 0)

    return render_template('meta.html',
                           data_loaded=True,
                           stats=commit_stats(lines, commits),
                           commits_view=commits_view,
                           commit_units=commit_units,
                           commits_spacer=spacer_height(commits_view),
                           files_page=files_page,
                           file_units=file_units,
                           files_spacer=spacer_height(files_page),
                           tooltip=tooltip_view(None),
                           tooltip_offset=TOOLTIP_OFFSET,
                           item_height=current_app.config['ITEM_HEIGHT'])


@meta_bp.route('/window')
def window():
    """Re-render one story for a scroll offset; the chart comes back as a plotly figure"""
    story = request.args.get('story', 'commits')
    if story not in STORIES:
        return jsonify({'success': False, 'error': f'Unknown story: {story}'}), 400

    history = load_history()
    if history is None:
        return jsonify({'success': False, 'error': 'Commit data unavailable'}), 503

    state = state_from_args(request.args)
    offset = max(parse_int(request.args.get('offset'), 0), 0)
    view, units = render_story(story, history, state, offset)

    return jsonify({
        'success': True,
        'story': story,
        'view': serialize_page(view),
        'html': {
            'items': render_template('meta/_items.html', items=view.list.items),
            'files': render_template('meta/_files.html', units=units),
        },
    })


@meta_bp.route('/brush')
def brush():
    """Selection summary for a brushed rectangle on the current scatter plot"""
    history = load_history()
    if history is None:
        return jsonify({'success': False, 'error': 'Commit data unavailable'}), 503

    try:
        corners = [float(request.args[k]) for k in ('x0', 'y0', 'x1', 'y1')]
    except (KeyError, ValueError):
        corners = None

    state = state_from_args(request.args)
    offset = max(parse_int(request.args.get('offset'), 0), 0)
    view, _ = render_story('commits', history, state, offset)
    selection = Brush.from_corners(*corners) if corners else None
    summary = brush_summary(view.visible, selection)

    return jsonify({
        'success': True,
        'selected': summary.selected_ids,
        'count_text': summary.count_text,
        'breakdown': summary.breakdown,
    })
