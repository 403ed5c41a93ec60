import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()


class Config:
    DB_HOST = os.environ.get('DB_HOST', 'localhost')
    DB_USER = os.environ.get('DB_USER', 'root')
    DB_PASSWORD = os.environ.get('DB_PASSWORD', '')
    DB_NAME = os.environ.get('DB_NAME', 'cronogramas_db')

    SQLALCHEMY_DATABASE_URI = URL.create(
        'mysql+pymysql',
        username=DB_USER,
        password=DB_PASSWORD or None,
        host=DB_HOST,
        database=DB_NAME,
    ).render_as_string(hide_password=False)
    # Bounded pool, callers wait for a free connection
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_size': 10, 'max_overflow': 0, 'pool_pre_ping': True}
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    PORT = int(os.environ.get('PORT', 3000))
    CONSOLE_LOGS = os.environ.get('CONSOLE_LOGS') != 'false'
    LOGS_DIR = os.environ.get('LOGS_DIR', 'logs')


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CONSOLE_LOGS = False
