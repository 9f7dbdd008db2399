"""
ASGI entry point for the robot fleet backend
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'robot_fleet.settings')

application = get_asgi_application()
