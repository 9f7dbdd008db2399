# api/views/groups.py
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import (
    GroupCreateSerializer, GroupMemberSerializer, GroupSerializer, GroupWithRobotsSerializer,
    MemberAddSerializer, MemberRoleSerializer,
)
from ..services import groups


class GroupListView(APIView):

    # GET /groups
    def get(self, request, format=None):
        user_groups = groups.list_groups(request.user)
        return Response(GroupWithRobotsSerializer(user_groups, many=True).data)

    # POST /groups
    def post(self, request, format=None):
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        group = groups.create_group(request.user, serializer.validated_data['name'])
        return Response(GroupSerializer(group).data, status=status.HTTP_201_CREATED)


class GroupDetailView(APIView):

    # GET /groups/{group_id}
    def get(self, request, group_id, format=None):
        group = groups.get_group(request.user, group_id)
        return Response(GroupWithRobotsSerializer(group).data)

    # DELETE /groups/{group_id}
    def delete(self, request, group_id, format=None):
        groups.delete_group(request.user, group_id)
        return Response({'message': 'Group deleted successfully'})


class GroupMemberListView(APIView):

    # POST /groups/{group_id}/members
    def post(self, request, group_id, format=None):
        serializer = MemberAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        membership = groups.add_member(request.user, group_id, **serializer.validated_data)
        return Response(GroupMemberSerializer(membership).data, status=status.HTTP_201_CREATED)


class GroupMemberDetailView(APIView):

    # DELETE /groups/{group_id}/members/{user_id}
    def delete(self, request, group_id, user_id, format=None):
        groups.remove_member(request.user, group_id, user_id)
        return Response({'message': 'Member removed successfully'})


class GroupMemberRoleView(APIView):

    # PATCH /groups/{group_id}/members/{user_id}/role
    def patch(self, request, group_id, user_id, format=None):
        serializer = MemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        membership = groups.update_member_role(request.user, group_id, user_id, serializer.validated_data['role'])
        return Response(GroupMemberSerializer(membership).data)
