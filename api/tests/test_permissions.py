from django.urls import reverse
from rest_framework import status

from ..models import GroupMember, PermissionType, RobotPermission, RobotSetting
from .base import BaseAPITestCase


class GrantPermissionAPITests(BaseAPITestCase):

    def setUp(self):
        super().setUp()
        self.owner = self._create_user('owner@example.com')
        self.target = self._create_user('target@example.com')
        self.stranger = self._create_user('stranger@example.com')
        self.robot = self._create_robot('SN-1', self.owner)
        self.url = reverse('api:robot-permissions', args=['SN-1'])
        self._auth_as(self.owner)

    def test_grant_by_user_id(self):
        response = self.client.post(self.url, {'userId': self.target.id, 'permissionType': 'USAGE'},
                                    format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['userId'], self.target.id)
        self.assertEqual(response.data['robotId'], self.robot.id)
        self.assertEqual(response.data['permissionType'], PermissionType.USAGE)
        self.assertEqual(response.data['user']['email'], 'target@example.com')

    def test_grant_by_email(self):
        response = self.client.post(self.url, {'email': self.target.email, 'permissionType': 'ADMIN'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(RobotPermission.objects.get(user=self.target, robot=self.robot).permission_type,
                         PermissionType.ADMIN)

    def test_regrant_updates_existing_grant(self):
        self._grant(self.target, self.robot, PermissionType.USAGE)
        response = self.client.post(self.url, {'userId': self.target.id, 'permissionType': 'ADMIN'},
                                    format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        grants = RobotPermission.objects.filter(user=self.target, robot=self.robot)
        self.assertEqual(grants.count(), 1)
        self.assertEqual(grants.get().permission_type, PermissionType.ADMIN)

    def test_grant_requires_target(self):
        response = self.client.post(self.url, {'permissionType': 'USAGE'}, format='json')
        self._assert_error_response(response, status.HTTP_400_BAD_REQUEST, "User ID or email")

    def test_grant_rejects_unknown_permission_type(self):
        response = self.client.post(self.url, {'userId': self.target.id, 'permissionType': 'OWNER'},
                                    format='json')
        self._assert_error_response(response, status.HTTP_400_BAD_REQUEST, "Permission type must be USAGE or ADMIN")

    def test_grant_unknown_user(self):
        response = self.client.post(self.url, {'email': 'ghost@example.com', 'permissionType': 'USAGE'},
                                    format='json')
        self._assert_error_response(response, status.HTTP_404_NOT_FOUND, "User not found")

    def test_grant_on_missing_robot(self):
        response = self.client.post(reverse('api:robot-permissions', args=['SN-NOPE']),
                                    {'userId': self.target.id, 'permissionType': 'USAGE'}, format='json')
        self._assert_error_response(response, status.HTTP_404_NOT_FOUND, "Robot not found")

    def test_authorization_checked_before_target_lookup(self):
        self._auth_as(self.stranger)
        response = self.client.post(self.url, {'email': 'ghost@example.com', 'permissionType': 'USAGE'},
                                    format='json')
        self._assert_error_response(response, status.HTTP_403_FORBIDDEN, "Only robot admins can grant permissions")

    def test_usage_grantee_cannot_grant(self):
        self._grant(self.target, self.robot, PermissionType.USAGE)
        self._auth_as(self.target)
        response = self.client.post(self.url, {'userId': self.stranger.id, 'permissionType': 'USAGE'},
                                    format='json')
        self._assert_error_response(response, status.HTTP_403_FORBIDDEN)
        self.assertFalse(RobotPermission.objects.filter(user=self.stranger).exists())

    def test_admin_grantee_can_grant(self):
        self._grant(self.target, self.robot, PermissionType.ADMIN)
        self._auth_as(self.target)
        response = self.client.post(self.url, {'userId': self.stranger.id, 'permissionType': 'USAGE'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)


class RevokePermissionAPITests(BaseAPITestCase):

    def setUp(self):
        super().setUp()
        self.owner = self._create_user('owner@example.com')
        self.target = self._create_user('target@example.com')
        self.robot = self._create_robot('SN-1', self.owner)
        self._auth_as(self.owner)

    def _revoke(self, user_id, serial_number='SN-1'):
        return self.client.delete(reverse('api:robot-permission-detail', args=[serial_number, user_id]))

    def test_revoke_existing_grant(self):
        self._grant(self.target, self.robot, PermissionType.USAGE)
        response = self._revoke(self.target.id)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(RobotPermission.objects.filter(user=self.target).exists())

    def test_revoke_missing_grant(self):
        self._assert_error_response(self._revoke(self.target.id), status.HTTP_404_NOT_FOUND, "Permission not found")

    def test_revoke_requires_robot_admin(self):
        self._grant(self.target, self.robot, PermissionType.USAGE)
        self._auth_as(self.target)
        self._assert_error_response(self._revoke(self.target.id), status.HTTP_403_FORBIDDEN,
                                    "Only robot admins can revoke permissions")
        self.assertTrue(RobotPermission.objects.filter(user=self.target).exists())

    def test_revoke_keeps_settings(self):
        self._grant(self.target, self.robot, PermissionType.USAGE)
        RobotSetting.objects.create(user=self.target, robot=self.robot, raw_settings='{"mode": "eco"}')
        self._revoke(self.target.id)
        self.assertTrue(RobotSetting.objects.filter(user=self.target, robot=self.robot).exists())


class AccessScenarioTests(BaseAPITestCase):
    """End-to-end flows through the HTTP surface."""

    def test_grant_then_revoke_usage(self):
        a_id, a_token = self._register('User A', 'a@example.com')
        b_id, b_token = self._register('User B', 'b@example.com')

        self._set_auth_bearer(a_token)
        response = self.client.post(reverse('api:robot-list'),
                                    {'serialNumber': 'SN-1', 'name': 'Rover', 'ownerType': 'USER'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        response = self.client.post(reverse('api:robot-permissions', args=['SN-1']),
                                    {'userId': b_id, 'permissionType': 'USAGE'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        self._set_auth_bearer(b_token)
        response = self.client.get(reverse('api:robot-detail', args=['SN-1']))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['userPermission'], PermissionType.USAGE)

        self._set_auth_bearer(a_token)
        response = self.client.delete(reverse('api:robot-permission-detail', args=['SN-1', b_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self._set_auth_bearer(b_token)
        response = self.client.get(reverse('api:robot-detail', args=['SN-1']))
        self._assert_error_response(response, status.HTTP_403_FORBIDDEN)

    def test_group_member_gains_admin_through_grant(self):
        a_id, a_token = self._register('User A', 'a@example.com')
        b_id, b_token = self._register('User B', 'b@example.com')
        c_id, _ = self._register('User C', 'c@example.com')

        self._set_auth_bearer(a_token)
        group_id = self.client.post(reverse('api:group-list'), {'name': 'Team'}, format='json').data['id']
        self.client.post(reverse('api:group-members', args=[group_id]), {'email': 'b@example.com'}, format='json')
        self.client.post(reverse('api:robot-list'), {'serialNumber': 'SN-G', 'name': 'Arm', 'ownerType': 'GROUP',
                                                     'ownerId': group_id}, format='json')

        # A plain member sees nothing until granted
        self._set_auth_bearer(b_token)
        self._assert_error_response(self.client.get(reverse('api:robot-detail', args=['SN-G'])),
                                    status.HTTP_403_FORBIDDEN)

        self._set_auth_bearer(a_token)
        self.client.post(reverse('api:robot-permissions', args=['SN-G']),
                         {'userId': b_id, 'permissionType': 'ADMIN'}, format='json')

        self._set_auth_bearer(b_token)
        response = self.client.get(reverse('api:robot-detail', args=['SN-G']))
        self.assertEqual(response.data['userPermission'], PermissionType.ADMIN)
        response = self.client.post(reverse('api:robot-permissions', args=['SN-G']),
                                    {'userId': c_id, 'permissionType': 'USAGE'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        response = self.client.delete(reverse('api:robot-permission-detail', args=['SN-G', c_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        # ...but still cannot delete it
        self._assert_error_response(self.client.delete(reverse('api:robot-detail', args=['SN-G'])),
                                    status.HTTP_403_FORBIDDEN)

    def test_group_deletion_leaves_no_residue(self):
        a_id, a_token = self._register('User A', 'a@example.com')
        b_id, b_token = self._register('User B', 'b@example.com')

        self._set_auth_bearer(a_token)
        group_id = self.client.post(reverse('api:group-list'), {'name': 'Team'}, format='json').data['id']
        self.client.post(reverse('api:group-members', args=[group_id]), {'email': 'b@example.com'}, format='json')
        self.client.post(reverse('api:robot-list'), {'serialNumber': 'SN-G', 'name': 'Arm', 'ownerType': 'GROUP',
                                                     'ownerId': group_id}, format='json')
        self.client.post(reverse('api:robot-permissions', args=['SN-G']),
                         {'userId': b_id, 'permissionType': 'USAGE'}, format='json')

        self._set_auth_bearer(b_token)
        self.client.post(reverse('api:robot-settings', args=['SN-G']), {'settings': {'speed': 3}}, format='json')
        self.assertEqual(RobotSetting.objects.filter(user_id=b_id).count(), 1)

        self._set_auth_bearer(a_token)
        response = self.client.delete(reverse('api:group-detail', args=[group_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.assertFalse(GroupMember.objects.filter(group_id=group_id).exists())
        self.assertFalse(RobotPermission.objects.filter(user_id=b_id).exists())
        self.assertFalse(RobotSetting.objects.filter(user_id=b_id).exists())

        self._set_auth_bearer(b_token)
        self.assertEqual(self.client.get(reverse('api:robot-list')).data, [])
        self._assert_error_response(self.client.get(reverse('api:robot-detail', args=['SN-G'])),
                                    status.HTTP_404_NOT_FOUND)
