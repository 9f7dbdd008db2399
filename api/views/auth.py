# api/views/auth.py
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import LoginSerializer, RegisterSerializer, UserSerializer
from ..services import accounts


class RegisterView(APIView):
    # A stale bearer header must not block registration
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request, format=None):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = accounts.register(**serializer.validated_data)
        return Response({'user': UserSerializer(user).data, 'token': token}, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request, format=None):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = accounts.login(**serializer.validated_data)
        return Response({'user': UserSerializer(user).data, 'token': token})


class UserInfoView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):
        return Response(UserSerializer(request.user).data)


class HealthView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request, format=None):
        return Response({'status': 'ok', 'message': 'Server is running'})
