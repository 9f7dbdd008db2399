# api/views/robots.py
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import (
    PermissionGrantSerializer, RobotCreateSerializer, RobotDetailSerializer,
    RobotPermissionSerializer, RobotSerializer, RobotWithAccessSerializer,
)
from ..services import robots


class RobotListView(APIView):

    # GET /robots
    def get(self, request, format=None):
        user_robots = robots.list_robots(request.user)
        return Response(RobotWithAccessSerializer(user_robots, many=True).data)

    # POST /robots
    def post(self, request, format=None):
        serializer = RobotCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        robot = robots.create_robot(request.user, **serializer.validated_data)
        return Response(RobotSerializer(robot).data, status=status.HTTP_201_CREATED)


class RobotDetailView(APIView):

    # GET /robots/{serial_number}
    def get(self, request, serial_number, format=None):
        robot = robots.get_robot(request.user, serial_number)
        return Response(RobotDetailSerializer(robot).data)

    # DELETE /robots/{serial_number}
    def delete(self, request, serial_number, format=None):
        robots.delete_robot(request.user, serial_number)
        return Response({'message': 'Robot deleted successfully'})


class RobotPermissionListView(APIView):

    # POST /robots/{serial_number}/permissions
    def post(self, request, serial_number, format=None):
        serializer = PermissionGrantSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        permission = robots.grant_permission(request.user, serial_number, **serializer.validated_data)
        return Response(RobotPermissionSerializer(permission).data, status=status.HTTP_201_CREATED)


class RobotPermissionDetailView(APIView):

    # DELETE /robots/{serial_number}/permissions/{user_id}
    def delete(self, request, serial_number, user_id, format=None):
        robots.revoke_permission(request.user, serial_number, user_id)
        return Response({'message': 'Permission revoked successfully'})
