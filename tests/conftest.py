"""
Pytest configuration and fixtures
"""

import json
from datetime import datetime
import pytest

from app import create_app
from models import LineRecord, Project
from utils.aggregate import process_commits


PROJECTS = [
    {'title': 'Bikewatching', 'year': '2020', 'image': 'bikes.png', 'description': 'Boston bike traffic'},
    {'title': 'Weather Stories', 'year': '2020', 'description': 'A decade of weather'},
    {'title': 'Recipe Finder', 'year': '2021', 'image': 'food.png', 'description': 'Cook with what you have',
     'tags': ['search', 'kitchen']},
    {'title': 'Energy Dashboard', 'year': '2022', 'description': 'Campus energy use'},
    {'title': 'Portfolio Site', 'year': '2022'},
]

LOC_CSV = """file,line,type,commit,author,date,time,timezone,datetime,depth,length
a.js,1,js,c1,Ann,2024-01-01,09:30:00-05:00,-05:00,2024-01-01T09:30:00-05:00,0,20
a.js,2,js,c1,Ann,2024-01-01,09:30:00-05:00,-05:00,2024-01-01T09:30:00-05:00,1,40
b.css,1,css,c1,Ann,2024-01-01,09:30:00-05:00,-05:00,2024-01-01T09:30:00-05:00,0,30
a.js,3,js,c2,Bob,2024-01-02,14:00:00-05:00,-05:00,2024-01-02T14:00:00-05:00,1,50
c.html,1,html,c3,Ann,2024-01-03,21:15:00-05:00,-05:00,2024-01-03T21:15:00-05:00,0,10
c.html,2,html,c3,Ann,2024-01-03,21:15:00-05:00,-05:00,2024-01-03T21:15:00-05:00,1,30
broken.js,1,js,,Ann,2024-01-03,21:15:00-05:00,-05:00,2024-01-03T21:15:00-05:00,0,30
"""


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / 'projects.json').write_text(json.dumps(PROJECTS), encoding='utf-8')
    (tmp_path / 'loc.csv').write_text(LOC_CSV, encoding='utf-8')
    return tmp_path


@pytest.fixture
def app(data_dir):
    app = create_app('testing')
    app.config.update(
        PROJECTS_DATA_URL=str(data_dir / 'projects.json'),
        LOC_DATA_URL=str(data_dir / 'loc.csv'),
        VISIBLE_COUNT=2,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def projects():
    return [Project(title=p['title'], year=int(p['year']), image=p.get('image'),
                    description=p.get('description'),
                    extra={k: v for k, v in p.items()
                           if k not in ('title', 'year', 'image', 'description')})
            for p in PROJECTS]


@pytest.fixture
def make_line():
    """Factory for LineRecord with sensible defaults"""
    def _make(commit='c1', file='a.js', type='js', when='2024-01-01T09:30:00-05:00',
              author='Ann', line=1, length=10, depth=0):
        stamp = datetime.fromisoformat(when)
        return LineRecord(
            commit=commit, author=author, date=stamp.replace(hour=0, minute=0, second=0),
            time=stamp.strftime('%H:%M:%S'), timezone=stamp.strftime('%z'),
            datetime=stamp, file=file, line=line, depth=depth, length=length, type=type,
        )
    return _make


@pytest.fixture
def lines(make_line):
    return [
        make_line('c1', 'a.js', 'js', '2024-01-01T09:30:00-05:00', line=1, length=20),
        make_line('c1', 'a.js', 'js', '2024-01-01T09:30:00-05:00', line=2, length=40),
        make_line('c1', 'b.css', 'css', '2024-01-01T09:30:00-05:00', line=1, length=30),
        make_line('c2', 'a.js', 'js', '2024-01-02T14:00:00-05:00', author='Bob', line=3, length=50),
        make_line('c3', 'c.html', 'html', '2024-01-03T21:15:00-05:00', line=1, length=10),
        make_line('c3', 'c.html', 'html', '2024-01-03T21:15:00-05:00', line=2, length=30),
    ]


@pytest.fixture
def commits(lines):
    return process_commits(lines, 'https://example.com/commit/')
