import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///animalia.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Operator password for /admin
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin'
    # Idle expiry of the admin session (minutes)
    ADMIN_SESSION_MINUTES = int(os.environ.get('ADMIN_SESSION_MINUTES', '30'))
    PERMANENT_SESSION_LIFETIME = timedelta(minutes=ADMIN_SESSION_MINUTES)
    SESSION_REFRESH_EACH_REQUEST = True
    # Max items shown in one game round
    PLAY_SAMPLE_SIZE = int(os.environ.get('PLAY_SAMPLE_SIZE', '10'))
    # Highest room id with a public start page
    START_PAGE_MAX_ROOM = int(os.environ.get('START_PAGE_MAX_ROOM', '2'))
    # Highest room id with public leaderboard/play pages
    PUBLIC_MAX_ROOM = int(os.environ.get('PUBLIC_MAX_ROOM', '4'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
