import os


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')

    # JSON Settings
    JSON_AS_ASCII = False

    # Site Settings
    SITE_TITLE = os.environ.get('SITE_TITLE', 'Bryan Zhang')
    GITHUB_URL = os.environ.get('GITHUB_URL', 'https://github.com/bryanzhang938')
    NAV_PAGES = [
        {'endpoint': 'pages.index', 'title': 'Home'},
        {'endpoint': 'projects.index', 'title': 'Projects'},
        {'endpoint': 'meta.index', 'title': 'Meta'},
        {'endpoint': 'pages.resume', 'title': 'Resume'},
        {'endpoint': 'pages.contact', 'title': 'Contact'},
    ]

    # Data Sources
    # Values starting with http:// or https:// are fetched, anything else is
    # resolved against the application root.
    PROJECTS_DATA_URL = os.environ.get('PROJECTS_DATA_URL', 'data/projects.json')
    LOC_DATA_URL = os.environ.get('LOC_DATA_URL', 'data/loc.csv')
    FETCH_TIMEOUT = int(os.environ.get('FETCH_TIMEOUT', '10'))
    COMMIT_URL_BASE = os.environ.get(
        'COMMIT_URL_BASE', 'https://github.com/vis-society/lab-7/commit/')

    # Scrollytelling Settings
    ITEM_HEIGHT = 120
    VISIBLE_COUNT = 10


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    FETCH_TIMEOUT = 1


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
