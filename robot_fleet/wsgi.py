"""
WSGI entry point for the robot fleet backend
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'robot_fleet.settings')

application = get_wsgi_application()
