# api/views/settings.py
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import RobotSettingSerializer, RobotSettingWithRobotSerializer, SettingsSaveSerializer
from ..services import robot_settings


class SettingsListView(APIView):

    # GET /settings
    def get(self, request, format=None):
        user_settings = robot_settings.list_settings(request.user)
        return Response(RobotSettingWithRobotSerializer(user_settings, many=True).data)


class RobotSettingsView(APIView):

    # GET /settings/{serial_number}
    def get(self, request, serial_number, format=None):
        setting = robot_settings.get_settings(request.user, serial_number)
        if setting is None:
            return Response({'settings': {}})
        return Response(RobotSettingSerializer(setting).data)

    # POST /settings/{serial_number}
    def post(self, request, serial_number, format=None):
        serializer = SettingsSaveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        setting = robot_settings.save_settings(request.user, serial_number, serializer.validated_data['settings'])
        return Response(RobotSettingSerializer(setting).data)
