"""
Data Management Module - Loads the static JSON/CSV resources behind the site
Resources are either fetched over HTTP or read from the application root,
then parsed into typed records.
"""

import csv
import io
import json
import math
import os
from datetime import datetime, timezone as dt_timezone
import requests
from flask import current_app
from models import Project, LineRecord


class FetchError(Exception):
    """A data resource could not be fetched or parsed"""

    def __init__(self, url, message, status=None):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.status = status


def is_remote(url):
    return url.startswith('http://') or url.startswith('https://')


def fetch_text(url, timeout=10):
    """Fetch a resource as text, raising FetchError on any failure"""
    if is_remote(url):
        try:
            response = requests.get(url, timeout=timeout)
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e
        if not response.ok:
            raise FetchError(url, f"HTTP {response.status_code}", status=response.status_code)
        return response.text

    path = url if os.path.isabs(url) else os.path.join(current_app.root_path, url)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        raise FetchError(url, str(e)) from e


def parse_text(url, text, kind):
    """Parse JSON into a list or CSV into a list of row dicts"""
    if kind == 'json':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise FetchError(url, f"Invalid JSON: {e}") from e
        if not isinstance(data, list):
            raise FetchError(url, 'Expected a JSON array')
        return data
    if kind == 'csv':
        try:
            return list(csv.DictReader(io.StringIO(text)))
        except csv.Error as e:
            raise FetchError(url, f"Invalid CSV: {e}") from e
    raise FetchError(url, f"Unsupported resource kind: {kind}")


def guess_kind(url):
    path = url.split('?', 1)[0].lower()
    if path.endswith('.csv'):
        return 'csv'
    return 'json'


def load_data(url, kind=None):
    """
    Load a static JSON or CSV resource

    Args:
        url (str): HTTP(S) URL or path relative to the application root
        kind (str, optional): 'json' or 'csv', guessed from the extension

    Returns:
        list | None: Parsed rows, or None when the resource is unavailable
    """
    kind = kind or guess_kind(url)
    timeout = current_app.config.get('FETCH_TIMEOUT', 10)
    try:
        rows = parse_text(url, fetch_text(url, timeout=timeout), kind)
    except FetchError as e:
        current_app.logger.error(f"✗ Failed to load {url}: {str(e)}")
        return None
    current_app.logger.info(f"Loaded {len(rows)} rows from {url}")
    return rows


# ========== COERCION ========== #

def to_number(value):
    """Coerce a CSV cell to a number; blanks become 0, garbage becomes None"""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if not text:
        return 0
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number):
        return None
    return int(number) if number.is_integer() else number


def to_datetime(value):
    """Parse an ISO 8601 timestamp, returning None when it is not one"""
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        return None


def to_offset(text):
    """tzinfo for a UTC offset such as '-08:00', or None"""
    if not text:
        return None
    try:
        return datetime.strptime(str(text).strip(), '%z').tzinfo
    except ValueError:
        return None


def make_aware(moment, timezone=None):
    """Attach the given offset (UTC when absent) to a naive timestamp"""
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=to_offset(timezone) or dt_timezone.utc)


def combine_date(date_text, timezone):
    """Midnight of the given date at the given UTC offset (e.g. '-08:00')"""
    if not date_text:
        return None
    return make_aware(to_datetime(f"{str(date_text).strip()}T00:00"), timezone)


def to_year(value):
    number = to_number(value)
    if isinstance(number, int):
        return number
    return value


# ========== RECORD PARSING ========== #

PROJECT_FIELDS = ('title', 'year', 'image', 'description')


def parse_project(row):
    """Build a Project from a JSON object, or None if it has no title"""
    if not isinstance(row, dict) or not row.get('title'):
        return None
    extra = {k: v for k, v in row.items() if k not in PROJECT_FIELDS}
    return Project(
        title=row['title'],
        year=to_year(row.get('year')),
        image=row.get('image') or None,
        description=row.get('description') or None,
        extra=extra,
    )


def parse_line(row):
    """Build a LineRecord from a CSV row, or None if commit/datetime are unusable"""
    commit = (row.get('commit') or '').strip()
    stamp = make_aware(to_datetime(row.get('datetime')), row.get('timezone'))
    if not commit or stamp is None:
        return None
    return LineRecord(
        commit=commit,
        author=row.get('author') or '',
        date=combine_date(row.get('date'), row.get('timezone')),
        time=row.get('time') or '',
        timezone=row.get('timezone') or '',
        datetime=stamp,
        file=row.get('file') or '',
        line=to_number(row.get('line')),
        depth=to_number(row.get('depth')),
        length=to_number(row.get('length')),
        type=row.get('type') or '',
    )


def parse_rows(rows, parser, label):
    records = []
    skipped = 0
    for row in rows:
        record = parser(row)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        current_app.logger.warning(f"Skipped {skipped} malformed {label} row(s)")
    return records


def load_projects(url=None):
    """Load the project gallery; None when the resource is unavailable"""
    url = url or current_app.config['PROJECTS_DATA_URL']
    rows = load_data(url, kind='json')
    if rows is None:
        return None
    return parse_rows(rows, parse_project, 'project')


def load_lines(url=None):
    """Load line-level commit data; None when the resource is unavailable"""
    url = url or current_app.config['LOC_DATA_URL']
    rows = load_data(url, kind='csv')
    if rows is None:
        return None
    return parse_rows(rows, parse_line, 'line')
